from app.services.auth import AuthService

__all__ = ["AuthService"]
