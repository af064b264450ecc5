"""
Decision ledger: one like-or-pass per (user, post).

A like lives in ``likes`` and a pass in ``passes``; recording one kind
removes the other for the same (user, post), so re-submitting either
kind simply overwrites the previous decision and its timestamp.
"""
import logging
from collections import namedtuple
from typing import Dict, Optional, Set, Tuple
from sqlalchemy import func
from models import db, upsert, CodePost, Like, Pass
from utils.content import get_post
from utils.errors import ValidationError
from utils.transaction import transaction

logger = logging.getLogger(__name__)

LIKE = 'like'
PASS = 'pass'

DECISION_MODELS = {
    LIKE: Like,
    PASS: Pass,
}

DecisionOutcome = namedtuple('DecisionOutcome', ['kind', 'matched', 'owner_id'])


def record_decision(user_id: int, post_id: int, kind: str) -> DecisionOutcome:
    """
    Upsert the user's decision on a post.

    A like also runs the match check before the transaction commits, so
    the decision and any resulting match land together or not at all.
    """
    # Deferred to avoid a circular import; matching reads likes from here
    from utils.matching import evaluate_match

    if kind not in DECISION_MODELS:
        raise ValidationError(f"Invalid decision '{kind}'. Must be 'like' or 'pass'")

    model = DECISION_MODELS[kind]
    opposite = Pass if model is Like else Like

    with transaction(f"{kind} post"):
        owner_id = get_post(post_id).user_id

        upsert(
            model,
            {'user_id': user_id, 'code_post_id': post_id, 'created_at': func.now()},
            index_elements=['user_id', 'code_post_id'],
            update={'created_at': func.now()}
        )
        opposite.query.filter_by(
            user_id=user_id,
            code_post_id=post_id
        ).delete(synchronize_session=False)

        matched = evaluate_match(user_id, post_id) if kind == LIKE else False

    logger.info(f"User {user_id} recorded '{kind}' on post {post_id}")
    return DecisionOutcome(kind, matched, owner_id)


def decision_of(user_id: int, post_id: int) -> Optional[str]:
    """Current decision kind for (user, post), or None when undecided"""
    for kind, model in DECISION_MODELS.items():
        row = db.session.query(model.user_id).filter(
            model.user_id == user_id,
            model.code_post_id == post_id
        ).first()
        if row is not None:
            return kind
    return None


def has_decided(user_id: int, post_id: int) -> bool:
    return decision_of(user_id, post_id) is not None


def likes_by_user(user_id: int) -> Set[int]:
    rows = db.session.query(Like.code_post_id).filter(Like.user_id == user_id)
    return {row.code_post_id for row in rows}


def likes_on_posts_query(owner_id: int, liker_id: Optional[int] = None, lock: bool = False):
    query = db.session.query(Like.user_id, Like.code_post_id).join(
        CodePost, CodePost.id == Like.code_post_id
    ).filter(CodePost.user_id == owner_id)

    if liker_id is not None:
        query = query.filter(Like.user_id == liker_id)

    if lock:
        # Locking read: sees the latest committed likes, not the snapshot
        query = query.with_for_update(read=True)

    return query


def likes_on_posts_owned_by(
    owner_id: int,
    liker_id: Optional[int] = None,
    lock: bool = False
) -> Set[Tuple[int, int]]:
    """
    (liker_id, post_id) pairs for every like on a post owned by ``owner_id``,
    optionally narrowed to a single liker. ``lock`` takes shared row locks.
    """
    query = likes_on_posts_query(owner_id, liker_id=liker_id, lock=lock)
    return {(row.user_id, row.code_post_id) for row in query}


def like_counts(post_ids) -> Dict[int, int]:
    """Number of likes per post id; posts without likes are left out"""
    if not post_ids:
        return {}
    rows = db.session.query(Like.code_post_id, func.count()).filter(
        Like.code_post_id.in_(list(post_ids))
    ).group_by(Like.code_post_id)
    return {post_id: count for post_id, count in rows}
