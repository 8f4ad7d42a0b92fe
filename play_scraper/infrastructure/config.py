"""
Scraper configuration and settings.

Centralizes configuration for the scraper facade and CLI,
including default values and environment variables.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional
import os


@dataclass(frozen=True)
class CacheTTLConfig:
    """Cache lifetime per operation, in seconds."""
    app_details: float = 3600.0
    developer_apps: float = 1800.0
    similar_apps: float = 3600.0
    category_apps: float = 900.0
    search: float = 600.0
    permissions: float = 86400.0
    reviews: float = 300.0


@dataclass(frozen=True)
class ScraperConfig:
    """Configuration for scraper operations."""

    # Caching
    enable_cache: bool = True
    cache_ttl: CacheTTLConfig = field(default_factory=CacheTTLConfig)

    # Request pacing
    throttle: str = "human"
    throttle_base_delay: float = 1.0  # Seconds between requests

    # Retry settings
    retry_policy: str = "default"

    # Locale defaults
    language: str = "en"
    country: str = "us"

    # HTTP
    timeout: float = 60.0
    minimal_headers: bool = False

    # Parsing
    strict_parsing: bool = False

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ScraperConfig':
        """Create config from PLAY_SCRAPER_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            enable_cache=env.get("PLAY_SCRAPER_ENABLE_CACHE", "true").lower() == "true",
            throttle=env.get("PLAY_SCRAPER_THROTTLE", "human"),
            throttle_base_delay=float(env.get("PLAY_SCRAPER_THROTTLE_BASE_DELAY", "1.0")),
            retry_policy=env.get("PLAY_SCRAPER_RETRY_POLICY", "default"),
            language=env.get("PLAY_SCRAPER_LANGUAGE", "en"),
            country=env.get("PLAY_SCRAPER_COUNTRY", "us"),
            timeout=float(env.get("PLAY_SCRAPER_TIMEOUT", "60.0")),
            minimal_headers=env.get("PLAY_SCRAPER_MINIMAL_HEADERS", "false").lower() == "true",
            strict_parsing=env.get("PLAY_SCRAPER_STRICT_PARSING", "false").lower() == "true",
            log_level=env.get("PLAY_SCRAPER_LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "enable_cache": self.enable_cache,
            "cache_ttl": asdict(self.cache_ttl),
            "throttle": self.throttle,
            "throttle_base_delay": self.throttle_base_delay,
            "retry_policy": self.retry_policy,
            "language": self.language,
            "country": self.country,
            "timeout": self.timeout,
            "minimal_headers": self.minimal_headers,
            "strict_parsing": self.strict_parsing,
            "log_level": self.log_level,
        }


# Available throttlers for CLI help
AVAILABLE_THROTTLES = [
    "human",  # base delay plus 0-1s jitter
    "fixed",  # constant interval
    "none",
]

# Available retry presets for CLI help
AVAILABLE_RETRY_POLICIES = [
    "default",
    "aggressive",
    "conservative",
    "none",
]
