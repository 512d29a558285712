from app.routes.auth import router as auth_router
from app.routes.categories import router as categories_router
from app.routes.comments import router as comments_router
from app.routes.posts import router as posts_router
from app.routes.user import router as user_router

__all__ = [
    "auth_router",
    "categories_router",
    "comments_router",
    "posts_router",
    "user_router",
]
