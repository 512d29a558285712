from app.configs.settings import (
    CONFIG_MAP,
    EMAIL_PATTERN,
    Argon2Params,
    Settings,
    file_logger,
    settings,
)

__all__ = [
    "Argon2Params",
    "CONFIG_MAP",
    "EMAIL_PATTERN",
    "Settings",
    "file_logger",
    "settings",
]
