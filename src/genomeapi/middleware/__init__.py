"""HTTP transport middleware modules."""

from .auth import GenomeApiAuthProvider, build_auth_settings
from .ratelimit import RateLimitMiddleware, SlidingWindow
from .sessions import SessionPolicy, SessionStore

__all__ = [
    "GenomeApiAuthProvider",
    "RateLimitMiddleware",
    "SessionPolicy",
    "SessionStore",
    "SlidingWindow",
    "build_auth_settings",
]
