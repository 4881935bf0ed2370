"""
API routers.
"""

from .files import router as files_router
from .folders import router as folders_router
from .notifications import router as notifications_router
from .status import router as status_router

__all__ = [
  "files_router",
  "folders_router",
  "notifications_router",
  "status_router",
]
