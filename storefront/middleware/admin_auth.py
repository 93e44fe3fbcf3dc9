"""
Admin Session Token Authentication Middleware.

Verifies session tokens (JWT) issued by the identity provider and gates
admin endpoints on the token's role claim.

Session tokens carry:
- sub: User id
- email: User email
- role: 'ADMIN' or 'CUSTOMER'
- exp: Expiration time
- aud: Optional audience (checked when IDENTITY_TOKEN_AUDIENCE is set)
"""
import logging
import jwt
from functools import wraps
from flask import current_app, request, g

from ..models import UserRole
from ..utils.errors import unauthorized, forbidden

logger = logging.getLogger(__name__)


def decode_session_token(token: str) -> dict | None:
    """
    Decode and verify a session token.

    Args:
        token: JWT from the Authorization header

    Returns:
        Decoded token payload or None if invalid
    """
    if not token:
        return None

    secret = current_app.config.get('IDENTITY_TOKEN_SECRET') or current_app.config.get('SECRET_KEY')
    audience = current_app.config.get('IDENTITY_TOKEN_AUDIENCE') or None

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=['HS256'],
            audience=audience,
            options={
                'verify_aud': bool(audience),
                'verify_exp': True,
            }
        )
    except jwt.ExpiredSignatureError:
        logger.debug('[Auth] Session token expired')
        return None
    except jwt.InvalidAudienceError:
        logger.debug('[Auth] Invalid token audience')
        return None
    except jwt.InvalidTokenError as e:
        logger.debug(f'[Auth] Invalid token: {e}')
        return None


def get_token_from_request() -> str | None:
    """Bearer token from the Authorization header."""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1].strip()
    return None


def require_admin(f):
    """
    Decorator to require an authenticated administrator.

    Sets g.user_id, g.user_email and g.user_role.

    Returns 401 without a valid session token and 403 when the session
    belongs to a non-admin.

    Usage:
        @require_admin
        def my_endpoint():
            admin_id = g.user_id
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        payload = decode_session_token(get_token_from_request())

        if not payload or not payload.get('sub'):
            return unauthorized('Unauthorized')

        role = str(payload.get('role', '')).upper()
        if role != UserRole.ADMIN.value:
            logger.info(f"[Auth] Non-admin user {payload.get('sub')} denied admin access")
            return forbidden('Admin access required')

        g.user_id = payload.get('sub')
        g.user_email = payload.get('email')
        g.user_role = role

        return f(*args, **kwargs)

    return decorated_function
