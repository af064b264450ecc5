from typing import Any, Dict, Optional
from utils.errors import APIError, ValidationError, NotFound, Conflict, Unauthorized, InternalError

ERROR_STATUS_CODES = {
    ValidationError: 400,
    Unauthorized: 401,
    NotFound: 404,
    Conflict: 409,
    InternalError: 500,
}


def success_response(data: Any = None, message: str = "Success", status_code: int = 200):
    """Standard success response format for Flask-RESTful"""
    response = {
        "success": True,
        "message": message,
        "data": data
    }
    return response, status_code


def error_response(message: str = "Error", status_code: int = 400, details: Optional[Dict] = None):
    """Standard error response format for Flask-RESTful"""
    response = {
        "success": False,
        "error": {
            "message": message,
            "code": status_code,
            "details": details or {}
        }
    }
    return response, status_code


def api_error_response(error: APIError):
    """Map a core error onto its HTTP status and the error envelope"""
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return error_response(error.message, status_code, error.details)
    return error_response(error.message, 500, error.details)
