"""
Configuration: reads all settings from environment variables.
Never hardcodes credentials. Uses python-dotenv for local dev.
Timeouts and delays are in seconds.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_URL = "https://ascehazardtool.org/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

STORAGE_BACKENDS = ("local", "supabase")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise EnvironmentError(f"{name} must be a number of seconds, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class PipelineSettings:
    """Everything the interaction pipeline needs to know about timing and the target page."""

    url: str = DEFAULT_URL
    navigation_timeout: float = 60.0
    element_timeout: float = 30.0
    action_timeout: float = 5.0
    short_delay: float = 0.5
    medium_delay: float = 1.0
    long_delay: float = 2.0
    typing_delay: float = 0.05
    viewport_width: int = 1280
    viewport_height: int = 800
    user_agent: str = DEFAULT_USER_AGENT
    headless: bool = True

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        return cls(
            url=os.getenv("HAZARD_TOOL_URL", DEFAULT_URL),
            navigation_timeout=_env_float("NAVIGATION_TIMEOUT", 60.0),
            element_timeout=_env_float("ELEMENT_TIMEOUT", 30.0),
            action_timeout=_env_float("ACTION_TIMEOUT", 5.0),
            short_delay=_env_float("SHORT_DELAY", 0.5),
            medium_delay=_env_float("MEDIUM_DELAY", 1.0),
            long_delay=_env_float("LONG_DELAY", 2.0),
            typing_delay=_env_float("TYPING_DELAY", 0.05),
            headless=_env_bool("BROWSER_HEADLESS", True),
        )


@dataclass(frozen=True)
class Config:
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)

    # Storage
    storage_backend: str = "local"
    storage_dir: str = "storage"

    # Supabase (only when storage_backend == "supabase")
    supabase_url: str = ""
    supabase_service_key: str = ""  # Service role key (backend only)
    supabase_table: str = "wind_speed_results"
    supabase_bucket: str = "wind-speed-snapshots"

    @classmethod
    def from_env(cls) -> "Config":
        backend = os.getenv("STORAGE_BACKEND", "local").strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise EnvironmentError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}"
            )

        if backend == "supabase":
            missing = [
                key for key in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY") if not os.getenv(key)
            ]
            if missing:
                raise EnvironmentError(
                    f"Missing required environment variables: {', '.join(missing)}\n"
                    f"Copy .env.example to .env and fill in the values."
                )

        return cls(
            pipeline=PipelineSettings.from_env(),
            storage_backend=backend,
            storage_dir=os.getenv("STORAGE_DIR", "storage"),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_service_key=os.getenv("SUPABASE_SERVICE_KEY", ""),
            supabase_table=os.getenv("SUPABASE_TABLE", "wind_speed_results"),
            supabase_bucket=os.getenv("SUPABASE_BUCKET", "wind-speed-snapshots"),
        )
