"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The site key and secret keep their short env names (SITE_KEY, SECRET) so
existing deployments keep working without renaming their secrets.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Public key embedded in the widget, private key sent to siteverify
    site_key: str = ""
    secret: str = ""

    siteverify_url: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
    widget_script_url: str = "https://challenges.cloudflare.com/turnstile/v0/api.js"

    default_container_id: str = "captcha-container"
    default_success_callback: str = (
        'function(token) { console.log("Token:", token); }'
    )

    # None disables the local timeout; the remote service decides
    verify_timeout_seconds: Optional[float] = None


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # AppSettings switches to "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    app_name: str = "captcha-gateway"

    # Overrides the origin taken from the request (e.g. behind a proxy)
    public_origin: Optional[str] = None

    # Value of Access-Control-Allow-Origin on every response
    allow_origin: str = "*"

    # OpenAPI docs stay off so only the documented paths are served
    docs_url: Optional[str] = None

    # Sub-configs (composed via model_validator below)
    captcha: Optional[CaptchaSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.captcha is None:
            self.captcha = CaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()
        # Production logs default to JSON unless LOG_FORMAT says otherwise
        if self.is_production and "log_format" not in self.logging.model_fields_set:
            self.logging.log_format = "json"
        if self.public_origin:
            self.public_origin = self.public_origin.rstrip("/")
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
