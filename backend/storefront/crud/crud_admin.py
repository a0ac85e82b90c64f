from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.security import get_password_hash, verify_password
from storefront.models.admin import Admin as AdminModel


async def get_admin_by_username(db: AsyncSession, *, username: str) -> AdminModel | None:
    result = await db.execute(select(AdminModel).filter(AdminModel.username == username))
    return result.scalars().first()


async def create_admin(db: AsyncSession, *, username: str, password: str) -> AdminModel:
    db_obj = AdminModel(username=username, password_hash=get_password_hash(password))
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def authenticate(db: AsyncSession, *, username: str, password: str) -> AdminModel | None:
    """
    Authenticate an admin by username and password.
    Returns the admin if successful, None otherwise.
    """
    admin = await get_admin_by_username(db, username=username)
    if not admin:
        return None
    if not verify_password(password, admin.password_hash):
        return None
    return admin


async def update_password(db: AsyncSession, *, db_obj: AdminModel, new_password: str) -> AdminModel:
    db_obj.password_hash = get_password_hash(new_password)
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj
