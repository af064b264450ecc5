# models/users.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy_serializer import SerializerMixin
from .base import db


class User(db.Model, SerializerMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Credentials
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    profile_image = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    github_url = Column(String(500), nullable=True)

    created_at = Column(DateTime, server_default=func.now(), index=True)

    # Never leak the password hash through to_dict()
    serialize_only = ('id', 'username', 'email', 'profile_image', 'bio', 'github_url', 'created_at')

    def __repr__(self):
        return f'<User {self.username}>'
