from fastapi import APIRouter

# Import endpoint modules
from storefront.api.endpoints import admin
from storefront.api.endpoints import exports
from storefront.api.endpoints import categories
from storefront.api.endpoints import artists
from storefront.api.endpoints import artworks
from storefront.api.endpoints import orders
from storefront.api.endpoints import feedback

api_router = APIRouter()

api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(exports.router, prefix="/admin/export", tags=["Export"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(artists.router, prefix="/artists", tags=["Artists"])
api_router.include_router(artworks.router, prefix="/artworks", tags=["Artworks"])
api_router.include_router(orders.router, prefix="/orders", tags=["Orders"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
