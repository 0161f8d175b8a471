# utils/rate_limit.py
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings

# Per client IP, in-memory storage unless RATE_LIMIT_STORAGE_URI points elsewhere
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
)

# Register and login share the budget of 10 attempts per 15 minutes
auth_limit = limiter.shared_limit(settings.AUTH_RATE_LIMIT, scope="auth")
