"""
HTTP layer: throttling, User-Agent rotation and the aiohttp client.
"""
from .client import PlayStoreHttpClient, build_url
from .request_throttler import (
    FixedIntervalThrottler,
    HumanBehaviorThrottler,
    NoRequestThrottling,
    RequestThrottler,
    build_throttler,
)
from .user_agent import (
    CustomUserAgentProvider,
    DefaultUserAgentProvider,
    FileUserAgentProvider,
    UserAgentProvider,
)

__all__ = [
    "PlayStoreHttpClient",
    "build_url",
    "RequestThrottler",
    "NoRequestThrottling",
    "HumanBehaviorThrottler",
    "FixedIntervalThrottler",
    "build_throttler",
    "UserAgentProvider",
    "DefaultUserAgentProvider",
    "CustomUserAgentProvider",
    "FileUserAgentProvider",
]
