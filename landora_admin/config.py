"""
Configuration for the Landora admin gate.

All values come from the environment (or a `.env` file next to the working
directory). Secrets are never exposed to any client-visible surface.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

_LOCAL_ENVS = {"development", "dev", "local", "test"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Secrets ──
    ADMIN_EMAIL: str = ""
    # bcrypt hash (recommended) or plain text (backward compatibility only)
    ADMIN_PASSWORD: str = ""
    ADMIN_PASSWORD_HASH: str = ""
    ADMIN_AUTH_SECRET: str = ""

    # ── Runtime ──
    APP_ENV: str = "production"
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # ── Session / login tuning ──
    ADMIN_SESSION_TTL_SECONDS: int = 60 * 60 * 8
    ADMIN_LOGIN_DELAY_MS: int = 650
    ADMIN_LOGIN_MAX_ATTEMPTS: int = 12
    ADMIN_LOGIN_WINDOW_SECONDS: int = 15 * 60
    ADMIN_RATE_LIMIT_MAX_ENTRIES: int = 10_000
    ADMIN_BCRYPT_ROUNDS: int = 12

    @property
    def admin_email(self) -> str:
        return self.ADMIN_EMAIL.strip()

    @property
    def admin_password(self) -> str:
        """Configured password, falling back to ADMIN_PASSWORD_HASH."""
        return (self.ADMIN_PASSWORD or self.ADMIN_PASSWORD_HASH or "").strip()

    @property
    def auth_secret(self) -> str:
        return self.ADMIN_AUTH_SECRET.strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.admin_email and self.admin_password and self.auth_secret)

    @property
    def cookie_secure(self) -> bool:
        return self.APP_ENV.strip().lower() not in _LOCAL_ENVS
