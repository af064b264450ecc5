import logging
from collections import namedtuple
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, current_app
import jwt
from utils.response import error_response

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_ISSUER = "yourcode"
JWT_AUDIENCE = "yourcode"

# Verified identity handed to every authenticated resource method as ``ctx``
RequestContext = namedtuple('RequestContext', ['user_id', 'username', 'email'])


class AuthMiddleware:
    def _secret(self):
        secret = current_app.config.get('JWT_SECRET')
        if not secret:
            raise RuntimeError("JWT_SECRET is not configured")
        return secret

    def issue_token(self, user) -> str:
        """Sign a token for ``user`` valid for JWT_EXPIRES_SECONDS"""
        now = datetime.now(timezone.utc)
        payload = {
            'iss': JWT_ISSUER,
            'aud': JWT_AUDIENCE,
            'iat': now,
            'exp': now + timedelta(seconds=current_app.config.get('JWT_EXPIRES_SECONDS', 86400)),
            'data': {
                'id': user.id,
                'username': user.username,
                'email': user.email,
            }
        }
        return jwt.encode(payload, self._secret(), algorithm=JWT_ALGORITHM)

    def decode_token(self, token: str) -> dict:
        return jwt.decode(
            token,
            key=self._secret(),
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
            options={"verify_exp": True, "require": ["exp", "iat"]},
            leeway=60  # Allow 60 seconds of clock skew
        )

    def jwt_required(self, f):
        @wraps(f)
        def decorated(*args, **kwargs):
            auth_header = request.headers.get("Authorization", "")

            if not auth_header.startswith("Bearer "):
                logger.warning("Missing or malformed Authorization header")
                return error_response("Unauthorized - No Bearer token", 401)

            token = auth_header.split("Bearer ", 1)[1].strip()

            try:
                payload = self.decode_token(token)
                data = payload.get('data') or {}
                ctx = RequestContext(
                    user_id=int(data['id']),
                    username=data.get('username'),
                    email=data.get('email')
                )
                logger.debug("JWT validated for user: %s", ctx.user_id)

            except jwt.ExpiredSignatureError:
                logger.warning("JWT token expired")
                return error_response("Token expired", 401)
            except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as e:
                logger.warning("Invalid JWT token: %s", str(e))
                return error_response("Invalid token", 401)

            kwargs['ctx'] = ctx
            return f(*args, **kwargs)

        return decorated


# Global instance
auth_middleware = AuthMiddleware()
jwt_required = auth_middleware.jwt_required
issue_token = auth_middleware.issue_token
