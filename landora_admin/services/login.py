"""
Secret admin login.

Credentials come from ADMIN_EMAIL / ADMIN_PASSWORD (or ADMIN_PASSWORD_HASH),
and a successful login is answered with a token signed by ADMIN_AUTH_SECRET.
Every outcome takes at least ADMIN_LOGIN_DELAY_MS and returns the same
generic error, so callers cannot tell a wrong email from a wrong password,
a lockout, or a misconfigured server.
"""

import asyncio
import logging
import secrets
from typing import Awaitable, Callable, Optional

from landora_admin.auth import sign_admin_session
from landora_admin.config import Settings
from landora_admin.errors import ConfigurationError
from landora_admin.schemas import LoginResult
from landora_admin.services.passwords import AdminPasswordResolver
from landora_admin.services.rate_limit import LoginRateLimiter

logger = logging.getLogger(__name__)

ACCESS_DENIED = "Access denied"


class AdminLoginService:
    def __init__(
        self,
        rate_limiter: Optional[LoginRateLimiter] = None,
        password_resolver: Optional[AdminPasswordResolver] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.rate_limiter = rate_limiter if rate_limiter is not None else LoginRateLimiter()
        self.password_resolver = (
            password_resolver if password_resolver is not None else AdminPasswordResolver()
        )
        self._sleep = sleep

    async def attempt_login(
        self,
        email: str,
        password: str,
        client_address: str,
        settings: Settings,
    ) -> LoginResult:
        allowed = self.rate_limiter.hit(client_address)
        await self._sleep(settings.ADMIN_LOGIN_DELAY_MS / 1000)

        if not settings.is_configured:
            logger.warning(
                "Admin login misconfigured (ADMIN_EMAIL/ADMIN_PASSWORD/ADMIN_AUTH_SECRET)."
            )
            return _denied()

        if not allowed:
            logger.warning("Admin login rate limited.")
            return _denied()

        email_ok = secrets.compare_digest(
            (email or "").strip().lower().encode("utf-8"),
            settings.admin_email.lower().encode("utf-8"),
        )

        # bcrypt runs off the event loop
        loop = asyncio.get_running_loop()
        try:
            password_ok = await loop.run_in_executor(
                None, self._check_password, password or "", settings
            )
        except ConfigurationError as exc:
            logger.warning("Admin login misconfigured: %s", exc)
            return _denied()

        if not (email_ok and password_ok):
            logger.warning("Admin access denied.")
            return _denied()

        try:
            token = sign_admin_session(settings.auth_secret, settings.ADMIN_SESSION_TTL_SECONDS)
        except ConfigurationError as exc:
            logger.warning("Admin login misconfigured: %s", exc)
            return _denied()
        logger.info("Admin access granted.")
        return LoginResult(success=True, token=token)

    def _check_password(self, candidate: str, settings: Settings) -> bool:
        return self.password_resolver.verify(candidate, settings.admin_password)


def _denied() -> LoginResult:
    return LoginResult(success=False, error=ACCESS_DENIED)
