import logging
from middleware.auth import jwt_required
from flask_restful import Resource
from flask import request
from utils.errors import APIError
from utils.response import success_response, error_response, api_error_response
from utils.uploads import save_image

logger = logging.getLogger(__name__)


class UploadResource(Resource):
    """Accepts a multipart ``image`` field and stores the screenshot"""

    @jwt_required
    def post(self, ctx):
        try:
            stored = save_image(request.files.get('image'), ctx.user_id)
            return success_response(stored, "File uploaded successfully", 201)

        except APIError as e:
            logger.warning(f"Upload rejected for user {ctx.user_id}: {e.message}")
            return api_error_response(e)
        except Exception as e:
            logger.error(f"Error uploading file: {str(e)}")
            return error_response("Failed to upload file", 500)
