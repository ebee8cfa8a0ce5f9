"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclasses for safety and clarity
- Single source of truth for all configurable values

EXTENSIBILITY:
- To point at a 2Chat sandbox: set API_BASE_URL
- To search a different set of numbers: set PREDEFINED_NUMBERS
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

from ...domain.validation import is_valid_phone_number

# Load .env file if present (development convenience)
load_dotenv()


# Numbers searched by "search-all" when PREDEFINED_NUMBERS is not set.
# Duplicates are intentional: the orchestrator removes them.
DEFAULT_PREDEFINED_NUMBERS = (
    "+6580910054",
    "+6580261704",
    "+6587675861",
    "+6287811366678",
    "+6580914206",
    "+6580914387",
    "+6582040239",
    "+6582040694",
    "+6582040239",
    "+6580910054",
    "+6580910158",
)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_numbers(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class TwoChatSettings:
    """2Chat API connection settings."""

    api_key: str = field(default_factory=lambda: os.getenv("API_KEY", ""))
    base_url: str = field(
        default_factory=lambda: os.getenv("API_BASE_URL", "https://api.p.2chat.io/open")
    )
    api_key_header: str = "X-User-API-Key"

    # Transport timeout per request; the aggregator itself never times out
    timeout_seconds: int = field(default_factory=lambda: _env_int("API_TIMEOUT_SECONDS", 30))


@dataclass(frozen=True)
class SearchSettings:
    """Pagination and multi-number search settings."""

    default_max_pages: int = field(default_factory=lambda: _env_int("DEFAULT_MAX_PAGES", 10))

    # CLI "all groups" mode fetches fewer pages per group
    all_groups_max_pages: int = 5

    # 1 = strictly sequential; each worker thread uses its own HTTP session
    max_workers: int = field(default_factory=lambda: _env_int("SEARCH_MAX_WORKERS", 1))

    predefined_numbers: Tuple[str, ...] = field(
        default_factory=lambda: _env_numbers("PREDEFINED_NUMBERS", DEFAULT_PREDEFINED_NUMBERS)
    )


@dataclass(frozen=True)
class ServerSettings:
    """Web server settings."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))
    env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))

    @property
    def reload(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from chat_checker.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.twochat.base_url)
    """

    # Sub-settings groups
    twochat: TwoChatSettings = field(default_factory=TwoChatSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    # File paths
    export_dir: Path = field(
        default_factory=lambda: Path(os.getenv("EXPORT_DIR", "exports"))
    )

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        if not self.twochat.api_key:
            issues.append(
                "ERROR: API_KEY not set. "
                "Every call to the 2Chat API will fail with an authentication error."
            )

        if self.search.max_workers < 1:
            issues.append(
                f"WARNING: SEARCH_MAX_WORKERS={self.search.max_workers} is below 1. "
                "Searches will run sequentially."
            )

        if self.search.default_max_pages < 1:
            issues.append(
                f"WARNING: DEFAULT_MAX_PAGES={self.search.default_max_pages}. "
                "Requests without maxPages will return no messages."
            )

        invalid = [n for n in self.search.predefined_numbers if not is_valid_phone_number(n)]
        if invalid:
            issues.append(
                "WARNING: PREDEFINED_NUMBERS contains invalid numbers: "
                f"{', '.join(invalid)}. They will be reported as failures."
            )

        return issues

    @property
    def has_errors(self) -> bool:
        return any(issue.startswith("ERROR") for issue in self.validate())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
