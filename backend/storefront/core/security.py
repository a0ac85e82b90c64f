from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from storefront.core.config import settings
from storefront.schemas.admin import TokenPayload

# Configure passlib for password hashing (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES


class TokenExpiredError(Exception):
    pass


class InvalidTokenError(Exception):
    pass


def _secret_key() -> str:
    if not settings.SECRET_KEY:
        raise RuntimeError("SECRET_KEY is not configured.")
    return settings.SECRET_KEY


def create_access_token(
    subject: Union[str, Any],
    claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Creates a new admin JWT.
    'subject' is the admin id (password login) or the Google email (Google login).
    Extra 'claims' (id, username / email) are copied into the payload.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode: Dict[str, Any] = {"role": "admin", **(claims or {})}
    to_encode.update({"exp": expire, "sub": str(subject)})
    return jwt.encode(to_encode, _secret_key(), algorithm=ALGORITHM)


def decode_token(token: str) -> TokenPayload:
    """
    Decodes a JWT and returns its payload.
    Raises TokenExpiredError for expired tokens and InvalidTokenError for
    anything else (bad signature, malformed token, unexpected claims).
    """
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpiredError(str(e)) from e
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e
    try:
        return TokenPayload.model_validate(payload)
    except ValueError as e:
        raise InvalidTokenError(str(e)) from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_google_id_token(credential: str) -> Dict[str, Any]:
    """
    Verifies a Google ID token against GOOGLE_CLIENT_ID and returns its claims.
    Blocking (fetches Google's certificates), so call it from an executor.
    Raises ValueError when the token is invalid.
    """
    return id_token.verify_oauth2_token(
        credential, google_requests.Request(), settings.GOOGLE_CLIENT_ID
    )
