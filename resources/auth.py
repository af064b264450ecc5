import logging
from flask_restful import Resource
from flask import request
from middleware.auth import jwt_required, issue_token
from models import db
from utils.accounts import register_user, authenticate, public_user
from utils.errors import APIError
from utils.response import success_response, error_response, api_error_response
from utils.schemas import RegisterRequest, LoginRequest, parse_body

logger = logging.getLogger(__name__)


class RegisterResource(Resource):
    """Create an account and sign the caller in"""

    def post(self):
        try:
            body = parse_body(RegisterRequest, request.get_json(silent=True))
            user = register_user(body.username, body.email, body.password)

            return success_response(
                {'token': issue_token(user), 'user': public_user(user)},
                "User created successfully",
                201
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error registering user: {str(e)}")
            return error_response("Failed to create user", 500)


class LoginResource(Resource):

    def post(self):
        try:
            body = parse_body(LoginRequest, request.get_json(silent=True))
            user = authenticate(body.username, body.password)

            return success_response(
                {'token': issue_token(user), 'user': public_user(user)},
                "Login successful"
            )

        except APIError as e:
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error during login: {str(e)}")
            return error_response("Failed to log in", 500)


class VerifyTokenResource(Resource):

    @jwt_required
    def get(self, ctx):
        return success_response(
            {'valid': True, 'user': ctx._asdict()},
            "Token is valid"
        )
