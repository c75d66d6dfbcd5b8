# FILE: ecoscan-backend/extensions.py

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(
    # The default key is the IP address of the user making the request.
    key_func=get_remote_address,
    # Storage comes from RATELIMIT_STORAGE_URI in the app config (memory:// by default).
    default_limits=["1000 per day", "300 per hour"]
)

cors = CORS()
