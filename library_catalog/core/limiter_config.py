from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import get_limiter_storage_uri

# Global Limiter instance to be imported by controllers.
# main.create_app decides whether it is enabled (never in test mode).
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per hour", "50 per minute"],
    storage_uri=get_limiter_storage_uri(),
)

READ_LIMIT = "100 per minute"
WRITE_LIMIT = "30 per minute"
