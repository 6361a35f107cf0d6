"""Runtime configuration loaded from environment variables."""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field


DEFAULT_MANAGED_PLATFORM_SIGNALS = (
    "AWS_LAMBDA_FUNCTION_NAME",
    "VERCEL",
    "NETLIFY",
    "FUNCTIONS_WORKER_RUNTIME",
)


def env_int(environ: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def env_list(environ: Mapping[str, str], name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = environ.get(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    api_base_url: str = "http://localhost:5000/api"
    quickbooks_realm_id: str | None = None
    report_base_url: str | None = None
    report_locale: str = "es"

    browser_provider: str = "auto"
    chromium_executable_path: str | None = None
    browser_ws_endpoint: str | None = None
    managed_platform_signals: tuple[str, ...] = DEFAULT_MANAGED_PLATFORM_SIGNALS

    render_attempts: int = 3
    render_timeout_ms: int = 60000
    settle_delay_ms: int = 600
    viewport_width: int = 1080
    viewport_height: int = 8000

    upstream_timeout_seconds: int = 300

    resend_api_key: str | None = None
    resend_api_url: str = "https://api.resend.com"
    email_sender: str = "Inspections <onboarding@resend.dev>"

    cors_origins: tuple[str, ...] = field(
        default=("http://localhost:3000", "http://127.0.0.1:3000")
    )
    log_level: str = "INFO"


def _optional(environ: Mapping[str, str], name: str) -> str | None:
    value = (environ.get(name) or "").strip()
    return value or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``)."""

    env = os.environ if environ is None else environ
    defaults = Settings()

    cors_origins = env_list(env, "API_CORS_ORIGINS", defaults.cors_origins) or defaults.cors_origins

    return Settings(
        api_base_url=(_optional(env, "API_BASE_URL") or defaults.api_base_url).rstrip("/"),
        quickbooks_realm_id=_optional(env, "QUICKBOOKS_REALM_ID"),
        report_base_url=(_optional(env, "REPORT_BASE_URL") or "").rstrip("/") or None,
        report_locale=_optional(env, "REPORT_LOCALE") or defaults.report_locale,
        browser_provider=(_optional(env, "BROWSER_PROVIDER") or defaults.browser_provider).lower(),
        chromium_executable_path=_optional(env, "CHROMIUM_EXECUTABLE_PATH"),
        browser_ws_endpoint=_optional(env, "BROWSER_WS_ENDPOINT"),
        managed_platform_signals=env_list(
            env, "MANAGED_PLATFORM_SIGNALS", defaults.managed_platform_signals
        ),
        render_attempts=env_int(env, "PDF_RENDER_ATTEMPTS", defaults.render_attempts),
        render_timeout_ms=env_int(
            env, "PDF_RENDER_TIMEOUT_MS", defaults.render_timeout_ms, minimum=1000
        ),
        settle_delay_ms=env_int(env, "PDF_SETTLE_DELAY_MS", defaults.settle_delay_ms, minimum=0),
        viewport_width=env_int(env, "PDF_VIEWPORT_WIDTH", defaults.viewport_width, minimum=320),
        viewport_height=env_int(env, "PDF_VIEWPORT_HEIGHT", defaults.viewport_height, minimum=320),
        upstream_timeout_seconds=env_int(
            env, "UPSTREAM_TIMEOUT_SECONDS", defaults.upstream_timeout_seconds
        ),
        resend_api_key=_optional(env, "RESEND_API_KEY"),
        resend_api_url=(_optional(env, "RESEND_API_URL") or defaults.resend_api_url).rstrip("/"),
        email_sender=_optional(env, "EMAIL_SENDER") or defaults.email_sender,
        cors_origins=cors_origins,
        log_level=(_optional(env, "LOG_LEVEL") or defaults.log_level).upper(),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""

    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (used in tests)."""

    global _settings
    _settings = None
