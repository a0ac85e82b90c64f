from slowapi import Limiter
from slowapi.util import get_remote_address

from storefront.core.config import settings

# Moving-window counters keyed by client IP, held in process memory.
# Not shared between replicas; reset on restart.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    strategy="moving-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
