from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index, func, true
from sqlalchemy_serializer import SerializerMixin
from .base import db


class CodePost(db.Model, SerializerMixin):
    __tablename__ = "code_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(200), nullable=False)
    code_image = Column(String(500), nullable=False)
    language = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)

    # Soft delete only: likes/passes keep pointing at retracted posts
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    view_count = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime, server_default=func.now())

    owner = db.relationship("User", lazy="joined")

    __table_args__ = (
        Index("idx_code_posts_user_id", "user_id"),
        Index("idx_code_posts_active_created", "is_active", "created_at"),
    )

    serialize_only = (
        'id', 'user_id', 'title', 'code_image', 'language', 'description',
        'is_active', 'view_count', 'created_at',
    )

    def __repr__(self):
        return f'<CodePost {self.id} by {self.user_id}>'
