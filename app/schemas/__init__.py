from app.schemas.auth import (
    AuthIdentity,
    AuthResult,
    AuthStatus,
    AuthUser,
    LoginRequest,
    SessionData,
)
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.schemas.comment import (
    CommentCreate,
    CommentRead,
    CommentUpdate,
    CommentWithPostTitle,
    NewComment,
    PendingCount,
)
from app.schemas.post import (
    PostCreate,
    PostCreated,
    PostDetail,
    PostSummary,
    PostUpdate,
    PostWithComments,
)
from app.schemas.user import ProfileUpdate, UserCreate, UserProfile, UserUpdate

__all__ = [
    "AuthIdentity",
    "AuthResult",
    "AuthStatus",
    "AuthUser",
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "CommentCreate",
    "CommentRead",
    "CommentUpdate",
    "CommentWithPostTitle",
    "LoginRequest",
    "NewComment",
    "PendingCount",
    "PostCreate",
    "PostCreated",
    "PostDetail",
    "PostSummary",
    "PostUpdate",
    "PostWithComments",
    "ProfileUpdate",
    "SessionData",
    "UserCreate",
    "UserProfile",
    "UserUpdate",
]
