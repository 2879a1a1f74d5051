from slowapi import Limiter
from slowapi.util import get_remote_address
from .config import Settings

# The route decorators bind to this one Limiter at import time, so it is
# process wide: every create_app call reconfigures it and the most recent
# settings apply to all apps in the process.
limiter = Limiter(key_func=get_remote_address)

_limits = {"write": "30/minute", "auth": "10/minute"}

def configure_limiter(settings: Settings) -> Limiter:
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    _limits["write"] = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"
    _limits["auth"] = f"{settings.AUTH_RATE_LIMIT_PER_MINUTE}/minute"
    # counters from a previous app must not carry over
    limiter.reset()
    return limiter

def write_limit() -> str:
    return _limits["write"]

def auth_limit() -> str:
    return _limits["auth"]
