"""Application-wide extension instances."""

from flask_compress import Compress
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_migrate import Migrate

# Compression for responses (Brotli and Gzip)
compress = Compress()

# Storage is chosen in create_app: Redis when REDIS_URL is set, memory otherwise.
limiter = Limiter(key_func=get_remote_address)

login_manager = LoginManager()

migrate = Migrate()

__all__ = ["compress", "limiter", "login_manager", "migrate"]
