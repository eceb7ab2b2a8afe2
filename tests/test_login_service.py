"""
Admin login flow tests
======================
Generic denial, constant delay, rate limiting and token issuance.
Run with: python3 -m pytest tests/test_login_service.py -v
"""

import asyncio
import logging
import os
import sys

import bcrypt

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from landora_admin.auth import verify_admin_session
from landora_admin.config import Settings
from landora_admin.services.login import ACCESS_DENIED, AdminLoginService
from landora_admin.services.passwords import AdminPasswordResolver
from landora_admin.services.rate_limit import LoginRateLimiter

EMAIL = "Admin@Landora.example"
PASSWORD = "correct horse battery staple"
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()
SECRET = "login-test-secret-0123456789abcdef"
IP = "203.0.113.7"


# ── Helpers ──────────────────────────────────────────────────────────────────

def make_settings(**overrides) -> Settings:
    values = dict(
        ADMIN_EMAIL=EMAIL,
        ADMIN_PASSWORD=PASSWORD_HASH,
        ADMIN_PASSWORD_HASH="",
        ADMIN_AUTH_SECRET=SECRET,
        APP_ENV="development",
        ADMIN_BCRYPT_ROUNDS=4,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_service(clock=None):
    sleep = RecordingSleep()
    limiter = LoginRateLimiter(clock=clock or FakeClock())
    service = AdminLoginService(
        rate_limiter=limiter,
        password_resolver=AdminPasswordResolver(rounds=4),
        sleep=sleep,
    )
    return service, sleep


def login(service, email, password, settings=None, ip=IP):
    return asyncio.run(service.attempt_login(email, password, ip, settings or make_settings()))


# ── Credentials ──────────────────────────────────────────────────────────────

def test_correct_credentials_any_email_casing_succeed():
    service, _ = make_service()
    for candidate in (EMAIL, EMAIL.lower(), EMAIL.upper(), f"  {EMAIL}  "):
        result = login(service, candidate, PASSWORD)
        assert result.success, candidate
        assert result.error is None
        verification = verify_admin_session(result.token, SECRET)
        assert verification.valid
        assert verification.payload.expires_at - verification.payload.issued_at == 8 * 3600


def test_wrong_password_and_wrong_email_fail_identically():
    service, _ = make_service()
    wrong_password = login(service, EMAIL, "nope")
    wrong_email = login(service, "someone@else.example", PASSWORD)

    assert not wrong_password.success and not wrong_email.success
    assert wrong_password.error == wrong_email.error == ACCESS_DENIED
    assert wrong_password.token is None and wrong_email.token is None


def test_plain_text_configured_password_still_works():
    service, _ = make_service()
    settings = make_settings(ADMIN_PASSWORD=PASSWORD)
    assert login(service, EMAIL, PASSWORD, settings).success
    assert not login(service, EMAIL, "nope", settings).success


def test_password_hash_variable_is_used_as_fallback():
    service, _ = make_service()
    settings = make_settings(ADMIN_PASSWORD="", ADMIN_PASSWORD_HASH=PASSWORD_HASH)
    assert login(service, EMAIL, PASSWORD, settings).success


def test_missing_secret_fails_closed():
    service, _ = make_service()
    for missing in ("ADMIN_EMAIL", "ADMIN_AUTH_SECRET"):
        result = login(service, EMAIL, PASSWORD, make_settings(**{missing: ""}))
        assert not result.success
        assert result.error == ACCESS_DENIED
    result = login(service, EMAIL, PASSWORD, make_settings(ADMIN_PASSWORD="", ADMIN_PASSWORD_HASH=""))
    assert result.error == ACCESS_DENIED


# ── Delay ────────────────────────────────────────────────────────────────────

def test_every_outcome_waits_the_same_delay():
    service, sleep = make_service()
    login(service, EMAIL, PASSWORD)
    login(service, EMAIL, "nope")
    login(service, EMAIL, PASSWORD, make_settings(ADMIN_AUTH_SECRET=""))

    assert sleep.calls == [0.65, 0.65, 0.65]


# ── Rate limiting ────────────────────────────────────────────────────────────

def test_thirteenth_attempt_is_denied_even_with_correct_credentials():
    clock = FakeClock()
    service, sleep = make_service(clock)

    for _ in range(12):
        assert not login(service, EMAIL, "wrong").success
    result = login(service, EMAIL, PASSWORD)

    assert not result.success
    assert result.error == ACCESS_DENIED
    assert len(sleep.calls) == 13

    # other addresses are unaffected
    assert login(service, EMAIL, PASSWORD, ip="198.51.100.9").success


def test_first_attempt_after_window_reset_is_accepted():
    clock = FakeClock()
    service, _ = make_service(clock)
    for _ in range(13):
        login(service, EMAIL, "wrong")
    assert not login(service, EMAIL, PASSWORD).success

    clock.now += 15 * 60 + 1
    assert login(service, EMAIL, PASSWORD).success


def test_injected_collaborators_are_kept():
    limiter = LoginRateLimiter(max_attempts=1)
    resolver = AdminPasswordResolver(rounds=4)
    service = AdminLoginService(rate_limiter=limiter, password_resolver=resolver)

    assert service.rate_limiter is limiter
    assert service.password_resolver is resolver


# ── Logging ──────────────────────────────────────────────────────────────────

def test_outcomes_are_logged_without_submitted_values(caplog):
    caplog.set_level(logging.INFO, logger="landora_admin.services.login")
    clock = FakeClock()
    service, _ = make_service(clock)
    wrong_password = "hunter2-not-the-password"

    login(service, EMAIL, PASSWORD)
    assert "Admin access granted." in caplog.text

    login(service, EMAIL, wrong_password)
    assert "Admin access denied." in caplog.text

    login(service, EMAIL, PASSWORD, make_settings(ADMIN_AUTH_SECRET=""))
    assert "misconfigured" in caplog.text

    for _ in range(12):
        login(service, EMAIL, wrong_password)
    assert "rate limited" in caplog.text

    for secret_value in (EMAIL, EMAIL.lower(), PASSWORD, wrong_password, SECRET):
        assert secret_value not in caplog.text
