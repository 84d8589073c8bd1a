from fastapi import APIRouter

from . import authors, books, health

api_router = APIRouter(prefix="/api")
api_router.include_router(books.router)
api_router.include_router(authors.router)
api_router.include_router(health.router)

__all__ = ["api_router"]
