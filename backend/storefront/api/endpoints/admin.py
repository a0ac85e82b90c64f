from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
import asyncio
import logging

from storefront import crud, schemas
from storefront.core import security
from storefront.core.config import settings
from storefront.core.rate_limit import limiter
from storefront.db.session import get_db
from storefront.api import deps

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=schemas.LoginResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    credentials: schemas.LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Username/password login. Returns a 7-day admin token.
    """
    admin = await crud.admin.authenticate(db, username=credentials.username, password=credentials.password)
    if not admin:
        logger.warning(f"Failed admin login for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = security.create_access_token(
        subject=admin.id, claims={"id": admin.id, "username": admin.username}
    )
    logger.info(f"Admin '{admin.username}' logged in")
    return {
        "message": "Login successful",
        "token": token,
        "admin": {"id": admin.id, "username": admin.username},
    }


@router.post("/google-login", response_model=schemas.LoginResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def google_login(request: Request, payload: schemas.GoogleLoginRequest) -> Any:
    """
    Login with a Google ID token. The account's email must be verified and on the ADMIN_EMAILS list.
    """
    if not settings.GOOGLE_CLIENT_ID:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Google login is not configured")

    loop = asyncio.get_running_loop()
    try:
        id_info = await loop.run_in_executor(None, security.verify_google_id_token, payload.credential)
    except ValueError as e:
        logger.warning(f"Rejected Google credential: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Google token")

    email = (id_info.get("email") or "").lower()
    if not email or not id_info.get("email_verified"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Google account email is not verified")
    if email not in settings.admin_email_list:
        logger.warning(f"Google login attempt from non-admin account {email}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Not an authorized admin.")

    google_id = id_info.get("sub") or email
    token = security.create_access_token(subject=email, claims={"id": google_id, "email": email})
    logger.info(f"Admin {email} logged in with Google")
    return {
        "message": "Login successful",
        "token": token,
        "admin": {"id": google_id, "email": email},
    }


@router.get("/verify", response_model=schemas.VerifyResponse)
async def verify_token(current_admin: schemas.TokenPayload = Depends(deps.get_current_admin)) -> Any:
    return {"valid": True, "admin": current_admin.to_admin()}


@router.post("/change-password", response_model=schemas.MessageResponse)
async def change_password(
    payload: schemas.ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    # Google sessions carry no username and have no password to change
    admin = None
    if current_admin.username:
        admin = await crud.admin.get_admin_by_username(db, username=current_admin.username)
    if not admin:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin account not found")

    if not security.verify_password(payload.current_password, admin.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")

    await crud.admin.update_password(db=db, db_obj=admin, new_password=payload.new_password)
    logger.info(f"Admin '{admin.username}' changed their password")
    return {"message": "Password changed successfully"}


@router.get("/dashboard/stats", response_model=schemas.DashboardStats)
async def read_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    stats = await crud.dashboard.get_dashboard_stats(db)
    stats["recent_orders"] = [
        schemas.Order.from_orm_order(order, artwork_title=title) for order, title in stats["recent_orders"]
    ]
    return stats
