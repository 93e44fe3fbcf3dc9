"""
Middleware package for the Springz admin service.
"""
from .admin_auth import require_admin, decode_session_token, get_token_from_request
