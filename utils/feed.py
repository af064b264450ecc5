import logging
from typing import List
from sqlalchemy import select
from models import CodePost, Like, Pass

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
MAX_BATCH_SIZE = 50


def next_batch(user_id: int, limit: int = DEFAULT_BATCH_SIZE) -> List[CodePost]:
    """
    The user's swipe queue: active posts owned by someone else that the
    user has neither liked nor passed, newest first.

    Deterministic for a given store state; an empty list just means the
    user has swiped through everything.
    """
    limit = max(1, min(limit, MAX_BATCH_SIZE))

    liked = select(Like.code_post_id).where(Like.user_id == user_id)
    passed = select(Pass.code_post_id).where(Pass.user_id == user_id)

    posts = CodePost.query.filter(
        CodePost.user_id != user_id,
        CodePost.is_active.is_(True),
        CodePost.id.not_in(liked),
        CodePost.id.not_in(passed)
    ).order_by(
        CodePost.created_at.desc(),
        CodePost.id.desc()
    ).limit(limit).all()

    logger.debug(f"Feed for user {user_id}: {len(posts)} posts")
    return posts
