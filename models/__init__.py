from .base import db, metadata, upsert
from .users import User
from .posts import CodePost
from .decisions import Like, Pass
from .matches import Match

__all__ = [
    'db',
    'metadata',
    'upsert',
    'User',
    'CodePost',
    'Like',
    'Pass',
    'Match',
]
