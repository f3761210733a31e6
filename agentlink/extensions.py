"""Flask extensions and shared instances"""

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Storage and limits come from RATELIMIT_* app config. init_app rebinds the
# enabled flag and storage, so one app per process is supported; a second
# create_app call takes over the limiter.
limiter = Limiter(key_func=get_remote_address)
