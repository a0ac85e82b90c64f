from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from storefront.core.security import decode_token, TokenExpiredError, InvalidTokenError
from storefront.core.config import settings
from storefront import schemas

# Clients obtain a token from /api/admin/login (JSON body) or /api/admin/google-login.
# auto_error=False so a missing header gets our own 401 body.
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/admin/login",
    auto_error=False,
)


async def get_current_admin(
    request: Request, token: Optional[str] = Depends(reusable_oauth2)
) -> schemas.TokenPayload:
    """
    Dependency to get the current admin from a Bearer JWT.
    Claims only; no database lookup. Missing or expired token -> 401, anything else invalid -> 403.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        token_data = decode_token(token)
    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired. Please login again.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token.")

    request.state.admin = token_data
    return token_data
