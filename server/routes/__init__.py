from fastapi import APIRouter
from . import auth, books, cron, health, prometheus

router = APIRouter()

router.include_router(health.router, tags=["Health"])
router.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
router.include_router(books.router, prefix="/api/books", tags=["Books"])
router.include_router(cron.router, prefix="/api/cron", tags=["Cron"])
router.include_router(prometheus.router, prefix="/metrics", tags=["Metrics"])
