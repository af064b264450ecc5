import logging
from middleware.auth import jwt_required
from flask_restful import Resource
from flask import request
from models import db
from utils.accounts import get_profile, update_profile, search_users
from utils.errors import APIError
from utils.response import success_response, error_response, api_error_response
from utils.schemas import ProfileUpdateRequest, parse_body

logger = logging.getLogger(__name__)


class CurrentUserResource(Resource):
    """Resource for current authenticated user's profile"""

    @jwt_required
    def get(self, ctx):
        """Get current user's profile"""
        try:
            profile = get_profile(ctx.user_id)
            return success_response(profile, "User profile retrieved successfully")

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error fetching user profile: {str(e)}")
            return error_response("Failed to fetch profile", 500)

    @jwt_required
    def put(self, ctx):
        """Update bio, profile image and/or GitHub link"""
        try:
            body = parse_body(ProfileUpdateRequest, request.get_json(silent=True))
            update_profile(ctx.user_id, body.model_dump(exclude_unset=True))

            return success_response(
                {'user_id': ctx.user_id, 'updated': True},
                "Profile updated successfully"
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating profile: {str(e)}")
            return error_response("Failed to update profile", 500)

    def patch(self):
        """Partially update current user's profile"""
        # Every field is optional, so PATCH and PUT behave the same
        return self.put()


class UserProfileResource(Resource):
    """Resource for viewing other users' profiles"""

    @jwt_required
    def get(self, user_id, ctx):
        try:
            profile = get_profile(user_id)
            return success_response(profile, "User profile retrieved")

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error fetching user {user_id}: {str(e)}")
            return error_response("Failed to fetch profile", 500)


class UserSearchResource(Resource):

    @jwt_required
    def get(self, ctx):
        try:
            users = search_users(request.args.get('q', ''))
            return success_response({'users': users}, f"Found {len(users)} users")

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error searching users: {str(e)}")
            return error_response("Failed to search users", 500)
