# bibcrawl/config.py
"""Runtime settings, overridable through BIBCRAWL_* environment variables."""

import os
from dataclasses import dataclass, fields

DEFAULT_BASE_URL = "https://dblp.org/search/publ/api"


@dataclass(frozen=True)
class Settings:
    """Crawl and HTTP client settings."""

    base_url: str = DEFAULT_BASE_URL
    page_size: int = 100
    concurrency: int = 8
    max_attempts: int = 3
    base_delay: float = 1.0  # seconds; backoff is attempt * base_delay
    timeout: float = 30.0
    user_agent: str = "bibcrawl/0.1 (+https://dblp.org)"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, falling back to defaults."""
        values: dict[str, object] = {}
        for f in fields(cls):
            env_name = f"BIBCRAWL_{f.name.upper()}"
            raw = os.getenv(env_name)
            if raw is None or raw.strip() == "":
                continue
            caster = type(f.default)
            try:
                values[f.name] = caster(raw.strip())
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e
        return cls(**values)  # type: ignore[arg-type]
