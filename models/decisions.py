from sqlalchemy_serializer import SerializerMixin
from .base import db


class Like(db.Model, SerializerMixin):
    __tablename__ = "likes"

    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    code_post_id = db.Column(db.Integer, db.ForeignKey('code_posts.id', ondelete='CASCADE'), primary_key=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        db.Index('idx_likes_post', 'code_post_id'),
    )


class Pass(db.Model, SerializerMixin):
    __tablename__ = "passes"

    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    code_post_id = db.Column(db.Integer, db.ForeignKey('code_posts.id', ondelete='CASCADE'), primary_key=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
