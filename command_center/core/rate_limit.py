"""Rate limiting for the agent endpoints.

Requests are keyed by client address. Limits are read from settings so a
deployment can tune or disable them without code changes.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from command_center.core.config import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)


def discovery_limit() -> str:
    return get_settings().RATE_LIMIT_DISCOVERY


def dispatch_limit() -> str:
    return get_settings().RATE_LIMIT_DISPATCH
