import asyncio
import logging
from storefront.db import session as db_session
from storefront.db.base_class import Base
from storefront.core.config import settings
# Import models so Base knows about every table
from storefront import models  # noqa: F401
from storefront import crud

# Logger for the init_db function and module-level messages
logger = logging.getLogger(__name__)


async def create_tables() -> None:
    engine = db_session.engine
    if not engine:
        logger.error("Database engine (from storefront.db.session) is not initialized. Cannot create tables.")
        return

    async with engine.begin() as conn:
        try:
            logger.info("Creating all tables...")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Tables created successfully.")
        except Exception as e:
            logger.error(f"Error during table creation: {e}")
            raise  # Re-raise the exception after logging


async def seed_initial_data() -> None:
    if not db_session.SessionLocal:
        return
    async with db_session.SessionLocal() as db:
        if settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD:
            existing = await crud.admin.get_admin_by_username(db, username=settings.ADMIN_USERNAME)
            if not existing:
                await crud.admin.create_admin(db, username=settings.ADMIN_USERNAME, password=settings.ADMIN_PASSWORD)
                logger.info(f"Admin user '{settings.ADMIN_USERNAME}' created.")
        else:
            logger.warning("ADMIN_USERNAME / ADMIN_PASSWORD not set. No admin account was seeded.")

        if settings.SEED_DEFAULT_CATEGORIES:
            added = await crud.category.seed_default_categories(db)
            if added:
                logger.info(f"Seeded {added} default categories.")


async def init_db() -> None:
    logger.info("Initializing database...")
    await create_tables()
    await seed_initial_data()
    logger.info("Database initialization complete.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(name)s:%(message)s')
    main_logger = logging.getLogger("__main__")

    if not settings.DATABASE_URL:
        main_logger.error("DATABASE_URL not set in settings. Exiting.")
    elif not db_session.engine:
        main_logger.error("Database engine in storefront.db.session is None. Exiting.")
    else:
        main_logger.info(f"Attempting DB initialization for: {db_session.mask_database_url(settings.DATABASE_URL)}")
        asyncio.run(init_db())
