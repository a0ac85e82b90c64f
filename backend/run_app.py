import uvicorn

from storefront.core.config import settings

if __name__ == "__main__":
    # Development server; production runs `uvicorn storefront.main:app` behind a process manager
    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.is_development,
    )
