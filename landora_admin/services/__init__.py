from landora_admin.services.login import ACCESS_DENIED, AdminLoginService
from landora_admin.services.passwords import AdminPasswordResolver
from landora_admin.services.rate_limit import LoginRateLimiter

__all__ = ["ACCESS_DENIED", "AdminLoginService", "AdminPasswordResolver", "LoginRateLimiter"]
