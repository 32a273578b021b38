"""Route modules."""

from .auth import router as auth_router
from .food_logs import router as food_logs_router
from .foods import router as foods_router
from .forum_comments import router as forum_comments_router
from .forums import router as forums_router
from .system import router as system_router
from .testimonials import router as testimonials_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "food_logs_router",
    "foods_router",
    "forum_comments_router",
    "forums_router",
    "system_router",
    "testimonials_router",
    "users_router",
]
