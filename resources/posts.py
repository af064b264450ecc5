import logging
from middleware.auth import jwt_required
from flask_restful import Resource
from flask import request
from models import db
from utils.cache import CacheManager
from utils.content import (
    create_post,
    deactivate_post,
    list_active_posts,
    list_posts_by_owner,
    view_post,
    DEFAULT_LIST_LIMIT
)
from utils.decisions import record_decision, likes_by_user, like_counts, LIKE, PASS
from utils.errors import APIError
from utils.feed import next_batch, DEFAULT_BATCH_SIZE
from utils.response import success_response, error_response, api_error_response
from utils.schemas import CreatePostRequest, parse_body

logger = logging.getLogger(__name__)


def serialize_posts(posts, viewer_id=None):
    """Post dicts with owner details and like counts; ``is_liked`` when a viewer is given"""
    counts = like_counts([post.id for post in posts])
    liked = likes_by_user(viewer_id) if viewer_id is not None else set()

    posts_data = []
    for post in posts:
        post_data = post.to_dict()
        post_data['username'] = post.owner.username if post.owner else None
        post_data['profile_image'] = post.owner.profile_image if post.owner else None
        post_data['like_count'] = counts.get(post.id, 0)
        if viewer_id is not None:
            post_data['is_liked'] = post.id in liked
        posts_data.append(post_data)

    return posts_data


class PostListResource(Resource):
    """Resource for the public post listing and post creation"""

    @jwt_required
    def get(self, ctx):
        """Latest active posts, newest first"""
        try:
            limit = request.args.get('limit', DEFAULT_LIST_LIMIT, type=int)
            offset = request.args.get('offset', 0, type=int)

            posts = list_active_posts(limit=limit, offset=offset)

            return success_response(
                {'posts': serialize_posts(posts), 'total': len(posts)},
                "Posts retrieved successfully"
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error listing posts: {str(e)}")
            return error_response("Failed to fetch posts", 500)

    @jwt_required
    def post(self, ctx):
        """Publish a new code screenshot"""
        try:
            body = parse_body(CreatePostRequest, request.get_json(silent=True))

            post_id = create_post(
                owner_id=ctx.user_id,
                title=body.title,
                image_ref=body.code_image,
                language=body.language,
                description=body.description
            )
            CacheManager.invalidate_user_cache(ctx.user_id)

            return success_response({'id': post_id}, "Post created successfully", 201)

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating post: {str(e)}")
            return error_response("Failed to create post", 500)


class SwipeFeedResource(Resource):
    """Resource for the current user's swipe queue"""

    @jwt_required
    def get(self, ctx):
        try:
            limit = request.args.get('limit', DEFAULT_BATCH_SIZE, type=int)
            posts = next_batch(ctx.user_id, limit=limit)

            if not posts:
                return success_response(
                    {'posts': []},
                    "No more posts to swipe. Check back soon!"
                )

            return success_response(
                {'posts': serialize_posts(posts)},
                f"Found {len(posts)} posts to swipe"
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error building feed: {str(e)}")
            return error_response("Failed to fetch posts", 500)


class PostDetailResource(Resource):
    """Resource for a single post: detail view and retraction"""

    @jwt_required
    def get(self, post_id, ctx):
        """Post detail; every fetch counts as one view"""
        try:
            post = view_post(post_id)

            post_data = serialize_posts([post], viewer_id=ctx.user_id)[0]
            post_data['bio'] = post.owner.bio if post.owner else None

            return success_response(post_data, "Post retrieved successfully")

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error fetching post {post_id}: {str(e)}")
            return error_response("Failed to fetch post", 500)

    @jwt_required
    def delete(self, post_id, ctx):
        try:
            deactivate_post(post_id, ctx.user_id)
            CacheManager.invalidate_user_cache(ctx.user_id)

            return success_response({'id': post_id}, "Post deleted successfully")

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error deleting post {post_id}: {str(e)}")
            return error_response("Failed to delete post", 500)


class PostDecisionResource(Resource):
    """Base resource for swiping on a post; subclasses pick the decision"""

    decision = None
    success_message = "Decision recorded"

    @jwt_required
    def post(self, post_id, ctx):
        try:
            outcome = record_decision(ctx.user_id, post_id, self.decision)
            CacheManager.invalidate_user_cache(outcome.owner_id)

            return success_response(
                {
                    'post_id': post_id,
                    'decision': outcome.kind,
                    'is_match': outcome.matched
                },
                "It's a match!" if outcome.matched else self.success_message
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error recording {self.decision} on post {post_id}: {str(e)}")
            return error_response(f"Failed to {self.decision} post", 500)


class PostLikeResource(PostDecisionResource):
    decision = LIKE
    success_message = "Post liked successfully"


class PostPassResource(PostDecisionResource):
    decision = PASS
    success_message = "Post passed successfully"


class UserPostsResource(Resource):
    """Resource for a user's own gallery of active posts"""

    @jwt_required
    def get(self, user_id, ctx):
        try:
            posts = list_posts_by_owner(user_id)

            return success_response(
                {'posts': serialize_posts(posts, viewer_id=ctx.user_id), 'total': len(posts)},
                "Posts retrieved successfully"
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error fetching posts for user {user_id}: {str(e)}")
            return error_response("Failed to fetch posts", 500)
