import re
from pydantic import BaseModel, constr, field_validator
from typing import Optional, Union


class LoginRequest(BaseModel):
    username: constr(strip_whitespace=True, min_length=1, max_length=50)
    password: constr(min_length=1)


class GoogleLoginRequest(BaseModel):
    credential: constr(min_length=1)  # Google ID token from the sign-in button


class ChangePasswordRequest(BaseModel):
    current_password: constr(min_length=1)
    new_password: constr(min_length=8, max_length=128)

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        if not re.search(r"[a-z]", v) or not re.search(r"[A-Z]", v) or not re.search(r"\d", v):
            raise ValueError("Password must contain at least one uppercase letter, one lowercase letter and one number")
        return v


# Admin identity as carried in the token and returned to the client.
# Password logins carry username, Google logins carry email.
class AdminOut(BaseModel):
    id: Union[int, str]
    username: Optional[str] = None
    email: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    token: str
    admin: AdminOut


class VerifyResponse(BaseModel):
    valid: bool
    admin: AdminOut


class MessageResponse(BaseModel):
    message: str


# Schema for token data
class TokenPayload(BaseModel):
    sub: str  # admin id (password login) or Google email
    id: Union[int, str]
    role: str
    username: Optional[str] = None
    email: Optional[str] = None
    exp: Optional[int] = None

    @field_validator("role")
    @classmethod
    def must_be_admin(cls, v: str) -> str:
        if v != "admin":
            raise ValueError("Token does not carry the admin role")
        return v

    def to_admin(self) -> AdminOut:
        return AdminOut(id=self.id, username=self.username, email=self.email)
