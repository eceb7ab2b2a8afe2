from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionPayload(BaseModel):
    """Signed body of an admin session token.

    Serialized with the short wire names `typ`, `v`, `iat`, `exp`.
    """

    model_config = ConfigDict(strict=True, extra="forbid", populate_by_name=True)

    type: str = Field(alias="typ")
    version: int = Field(alias="v")
    issued_at: int = Field(alias="iat")
    expires_at: int = Field(alias="exp")


class SessionVerification(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    payload: Optional[SessionPayload] = None


class SessionInfo(BaseModel):
    """Public view of the current admin session (no token material)."""

    issued_at: int = Field(serialization_alias="issuedAt")
    expires_at: int = Field(serialization_alias="expiresAt")
    seconds_remaining: int = Field(serialization_alias="secondsRemaining")


class LoginResult(BaseModel):
    success: bool
    error: Optional[str] = None
    token: Optional[str] = None
