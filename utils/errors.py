class APIError(Exception):
    """Base class for every failure the core reports to its callers"""

    def __init__(self, message: str = "Error", details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(APIError):
    """Missing or malformed required field"""


class NotFound(APIError):
    """
    Entity absent. Ownership checks on mutations also raise this,
    so a caller cannot tell "not yours" from "does not exist".
    """


class Conflict(APIError):
    """Unique key already taken"""


class Unauthorized(APIError):
    """No identity or an invalid one"""


class InternalError(APIError):
    """Store failure"""
