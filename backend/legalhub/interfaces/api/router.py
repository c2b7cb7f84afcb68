from fastapi import APIRouter

from legalhub.interfaces.api.catalog import router as catalog_router
from legalhub.interfaces.api.categories import router as categories_router
from legalhub.interfaces.api.companies import router as companies_router
from legalhub.interfaces.api.health import router as health_router
from legalhub.interfaces.api.posts import router as posts_router
from legalhub.interfaces.api.specialists import router as specialists_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(posts_router)
api_router.include_router(categories_router)
api_router.include_router(companies_router)
api_router.include_router(specialists_router)
api_router.include_router(catalog_router)
