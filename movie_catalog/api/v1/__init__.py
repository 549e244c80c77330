"""API v1 routes."""

from fastapi import APIRouter

from movie_catalog.api.v1 import auth, comments, health, movies

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth/users", tags=["users"])
router.include_router(movies.router, prefix="/movies", tags=["movies"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
