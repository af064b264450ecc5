"""
Content store: code posts and their active/retracted lifecycle.
"""
import logging
from typing import List, Optional
from models import db, CodePost
from utils.errors import ValidationError, NotFound
from utils.transaction import transaction

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 50


def _newest_first(query):
    # created_at has second resolution on some stores; id breaks ties
    return query.order_by(CodePost.created_at.desc(), CodePost.id.desc())


def create_post(
    owner_id: int,
    title: str,
    image_ref: str,
    language: Optional[str] = None,
    description: Optional[str] = None
) -> int:
    """Create an active post owned by ``owner_id`` and return its id"""
    if not title or not title.strip():
        raise ValidationError("title is required")
    if not image_ref or not image_ref.strip():
        raise ValidationError("code_image is required")

    with transaction("create post"):
        post = CodePost(
            user_id=owner_id,
            title=title.strip(),
            code_image=image_ref,
            language=language or None,
            description=description or None,
        )
        db.session.add(post)
        db.session.flush()
        post_id = post.id

    logger.info(f"Post {post_id} created by user {owner_id}")
    return post_id


def get_post(post_id: int) -> CodePost:
    """Return an active post, or raise NotFound"""
    post = CodePost.query.filter_by(id=post_id, is_active=True).first()
    if not post:
        raise NotFound("Post not found")
    return post


def deactivate_post(post_id: int, requester_id: int):
    """
    Retract a post. Only the owner may do it; any other requester gets
    the same NotFound as for a post that does not exist.
    """
    with transaction("delete post"):
        updated = CodePost.query.filter_by(
            id=post_id,
            user_id=requester_id,
            is_active=True
        ).update({CodePost.is_active: False}, synchronize_session=False)

        if not updated:
            raise NotFound("Post not found or unauthorized")

    logger.info(f"Post {post_id} deactivated by user {requester_id}")


def increment_view_count(post_id: int) -> bool:
    """Atomically bump the view counter of an active post"""
    with transaction("update view count"):
        updated = CodePost.query.filter_by(id=post_id, is_active=True).update(
            {CodePost.view_count: CodePost.view_count + 1},
            synchronize_session=False
        )
    return bool(updated)


def view_post(post_id: int) -> CodePost:
    """Detail path: count the view, then return the post with its new count"""
    if not increment_view_count(post_id):
        raise NotFound("Post not found")
    return get_post(post_id)


def list_active_posts(limit: int = DEFAULT_LIST_LIMIT, offset: int = 0) -> List[CodePost]:
    limit = max(1, min(limit, MAX_LIST_LIMIT))
    offset = max(0, offset)

    query = _newest_first(CodePost.query.filter(CodePost.is_active.is_(True)))
    return query.offset(offset).limit(limit).all()


def list_posts_by_owner(owner_id: int) -> List[CodePost]:
    query = CodePost.query.filter(
        CodePost.user_id == owner_id,
        CodePost.is_active.is_(True)
    )
    return _newest_first(query).all()
