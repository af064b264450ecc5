import logging
from typing import Tuple
from models import db, upsert, CodePost, Match, User
from utils.decisions import likes_on_posts_owned_by

logger = logging.getLogger(__name__)


def canonical_pair(user_a: int, user_b: int) -> Tuple[int, int]:
    """Order an unordered user pair so the smaller id comes first"""
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


def evaluate_match(liker_id: int, post_id: int) -> bool:
    """
    Run right after ``liker_id`` liked ``post_id``, inside the same transaction.

    Matches are user-to-user: if the post owner has liked any post owned by
    the liker, the canonical pair gets an active match row (created or
    reactivated). Returns True when the pair is matched afterwards.
    """
    owner_id = db.session.query(CodePost.user_id).filter(CodePost.id == post_id).scalar()
    if owner_id is None:
        return False

    # Liking your own post never matches you with yourself
    if owner_id == liker_id:
        logger.debug(f"Self-like by user {liker_id} on post {post_id}, skipping match check")
        return False

    user1_id, user2_id = canonical_pair(liker_id, owner_id)

    # Row locks on both users serialise concurrent likes within the pair
    db.session.query(User.id).filter(
        User.id.in_([user1_id, user2_id])
    ).order_by(User.id).with_for_update().all()

    if not likes_on_posts_owned_by(liker_id, liker_id=owner_id, lock=True):
        return False

    upsert(
        Match,
        {'user1_id': user1_id, 'user2_id': user2_id, 'is_active': True},
        index_elements=['user1_id', 'user2_id'],
        update={'is_active': True}
    )

    logger.info(f"Match established between {user1_id} and {user2_id}")
    return True


def is_matched(user_a: int, user_b: int) -> bool:
    if user_a == user_b:
        return False
    user1_id, user2_id = canonical_pair(user_a, user_b)
    is_active = db.session.query(Match.is_active).filter(
        Match.user1_id == user1_id,
        Match.user2_id == user2_id
    ).scalar()
    return bool(is_active)
