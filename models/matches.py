from .base import db
from sqlalchemy_serializer import SerializerMixin
from sqlalchemy import CheckConstraint, true


class Match(db.Model, SerializerMixin):
    __tablename__ = "matches"

    # Composite key is the canonical pair; user1_id is always the smaller id
    user1_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    user2_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True, server_default=true())
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        CheckConstraint('user1_id < user2_id', name='user_order'),
    )
