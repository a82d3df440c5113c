from fastapi import APIRouter

from roomgen.interfaces.http.routers import catalog, generate, profiles


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(generate.router, tags=["generation"])
    router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
    router.include_router(catalog.router, tags=["catalog"])
    return router


__all__ = [
    "create_api_router",
]
