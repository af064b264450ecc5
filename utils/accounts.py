"""
Registration, login and profile reads/updates.
"""
import logging
from typing import List
from sqlalchemy import func, or_
from werkzeug.security import generate_password_hash, check_password_hash
from models import db, User, CodePost, Like
from utils.cache import CacheManager, build_user_profile_cache_key, CACHE_TTL_SHORT
from utils.errors import ValidationError, NotFound, Conflict, Unauthorized
from utils.transaction import transaction

logger = logging.getLogger(__name__)

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 20

PROFILE_FIELDS = ('bio', 'profile_image', 'github_url')


def public_user(user: User) -> dict:
    return user.to_dict()


def register_user(username: str, email: str, password: str) -> User:
    username = (username or '').strip()
    email = (email or '').strip().lower()

    if not username or not email or not password:
        raise ValidationError("Missing required fields")

    existing = User.query.filter(
        or_(User.username == username, User.email == email)
    ).first()
    if existing:
        raise Conflict("User already exists")

    # The unique constraints still decide if two registrations race
    with transaction("create user", conflict_message="User already exists"):
        user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password)
        )
        db.session.add(user)

    logger.info(f"Registered user {user.id} ({username})")
    return user


def authenticate(identifier: str, password: str) -> User:
    """Look a user up by username or email and check the password"""
    identifier = (identifier or '').strip()
    user = User.query.filter(
        or_(User.username == identifier, User.email == identifier.lower())
    ).first()

    if not user or not check_password_hash(user.password_hash, password or ''):
        logger.warning(f"Failed login attempt for '{identifier}'")
        raise Unauthorized("Invalid credentials")

    return user


def get_profile(user_id: int) -> dict:
    """Profile with active post count and likes received across all posts"""
    cache_key = build_user_profile_cache_key(user_id)
    cached_profile = CacheManager.get(cache_key)
    if cached_profile is not None:
        return cached_profile

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound("User not found")

    post_count = CodePost.query.filter(
        CodePost.user_id == user_id,
        CodePost.is_active.is_(True)
    ).count()

    likes_received = db.session.query(func.count()).select_from(Like).join(
        CodePost, CodePost.id == Like.code_post_id
    ).filter(CodePost.user_id == user_id).scalar()

    profile = public_user(user)
    profile['post_count'] = post_count
    profile['likes_received'] = likes_received or 0

    CacheManager.set(cache_key, profile, ttl=CACHE_TTL_SHORT)
    return profile


def update_profile(user_id: int, changes: dict):
    """Apply the non-null profile fields in ``changes``"""
    updates = {
        field: value for field, value in changes.items()
        if field in PROFILE_FIELDS and value is not None
    }
    if not updates:
        raise ValidationError("No fields to update")

    with transaction("update profile"):
        user = db.session.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        for field, value in updates.items():
            setattr(user, field, value)

    CacheManager.invalidate_user_cache(user_id)
    logger.info(f"Updated profile for user {user_id}: {sorted(updates)}")


def search_users(query: str) -> List[dict]:
    query = (query or '').strip()
    if len(query) < SEARCH_MIN_LENGTH:
        return []

    needle = query.lower()
    users = User.query.filter(
        or_(
            func.lower(User.username).contains(needle, autoescape=True),
            func.lower(User.email).contains(needle, autoescape=True)
        )
    ).order_by(User.username).limit(SEARCH_LIMIT).all()

    return [
        {
            'id': user.id,
            'username': user.username,
            'email': user.email,
            'profile_image': user.profile_image,
            'bio': user.bio,
        }
        for user in users
    ]
