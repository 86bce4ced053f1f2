from datetime import date

from pydantic import EmailStr, Field, model_validator

from schemas.common import CamelModel


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: str | None = Field(None, max_length=100)


class LoginRequest(CamelModel):
    # The SPA may send either key; both are resolved the same way.
    email: str | None = None
    username: str | None = None
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _require_identifier(self) -> "LoginRequest":
        if not (self.email or "").strip() and not (self.username or "").strip():
            raise ValueError("email or username is required")
        return self

    @property
    def identifier(self) -> str:
        return ((self.email or "").strip() or (self.username or "").strip())


class PasswordResetRequest(CamelModel):
    email: EmailStr


class PasswordReset(CamelModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    name: str | None = None
    date_of_birth: date | None = None
    goals: list = Field(default_factory=list)
