"""
Central Extensions Module.
Keeps the extension instances in one place to avoid circular imports.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

# 1. Limiter (Rate Limiting)
limiter = Limiter(
    key_func=get_remote_address,
    # Memory storage is fine for a single instance; point to Redis when scaling out.
    storage_uri="memory://",
    default_limits=["200 per day", "50 per hour"]
)

# 2. CSRF Protection
csrf = CSRFProtect()
