"""
Seed script to populate the database with demo users, code posts and likes
for trying out the swipe feed and matching.
Run this script with: python seed_data.py
"""
import logging
from models import db, User, CodePost, Match
from utils.accounts import register_user
from utils.content import create_post
from utils.decisions import record_decision, LIKE

logger = logging.getLogger(__name__)

SEED_PASSWORD = "yourcode-demo"

SEED_USERS = [
    {
        "username": "rustacean",
        "email": "ferris@example.com",
        "posts": [
            {
                "title": "Zero-copy parser with nom",
                "code_image": "/uploads/seed_nom_parser.png",
                "language": "Rust",
                "description": "Parsing a binary header without a single allocation."
            },
        ]
    },
    {
        "username": "pythonista",
        "email": "guido.fan@example.com",
        "posts": [
            {
                "title": "Walrus in a comprehension",
                "code_image": "/uploads/seed_walrus.png",
                "language": "Python",
                "description": None
            },
            {
                "title": "contextlib.ExitStack to the rescue",
                "code_image": "/uploads/seed_exitstack.png",
                "language": "Python",
                "description": "Cleaning up a variable number of resources."
            },
        ]
    },
    {
        "username": "gopher",
        "email": "gopher@example.com",
        "posts": [
            {
                "title": "Fan-in with select",
                "code_image": "/uploads/seed_fanin.png",
                "language": "Go",
                "description": "Merging three channels into one."
            },
        ]
    },
]

# (liker username, owner username): the liker likes the owner's first post
SEED_LIKES = [
    ("rustacean", "pythonista"),
    ("pythonista", "rustacean"),
    ("gopher", "pythonista"),
]


def seed_database(password: str = SEED_PASSWORD) -> dict:
    """Create the demo data through the same operations the API uses"""
    users = {}
    first_posts = {}

    for user_data in SEED_USERS:
        existing = User.query.filter_by(username=user_data["username"]).first()
        if existing:
            logger.info(f"User {existing.username} already exists, skipping")
            users[existing.username] = existing.id
            continue

        user = register_user(user_data["username"], user_data["email"], password)
        users[user.username] = user.id
        logger.info(f"Created user: {user.username} ({user.id})")

        for post_data in user_data["posts"]:
            post_id = create_post(
                owner_id=user.id,
                title=post_data["title"],
                image_ref=post_data["code_image"],
                language=post_data["language"],
                description=post_data["description"]
            )
            first_posts.setdefault(user.username, post_id)

    for liker, owner in SEED_LIKES:
        if liker not in users or owner not in first_posts:
            continue
        outcome = record_decision(users[liker], first_posts[owner], LIKE)
        if outcome.matched:
            logger.info(f"{liker} and {owner} matched")

    summary = {
        "users": User.query.count(),
        "posts": CodePost.query.count(),
        "matches": Match.query.filter_by(is_active=True).count(),
    }
    logger.info(f"Database Summary: {summary}")
    return summary


if __name__ == "__main__":
    from app import app

    with app.app_context():
        db.create_all()
        seed_database()
