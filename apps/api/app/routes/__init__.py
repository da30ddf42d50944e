"""Route modules."""

from .admin import router as admin_router
from .businesses import router as businesses_router
from .creators import router as creators_router
from .job_postings import router as job_postings_router
from .registration import router as registration_router
from .reviews import router as reviews_router

__all__ = [
    "admin_router",
    "businesses_router",
    "creators_router",
    "job_postings_router",
    "registration_router",
    "reviews_router",
]
