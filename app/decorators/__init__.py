from app.decorators.error_handling import classify_exception, with_error_handling

__all__ = [
    "classify_exception",
    "with_error_handling",
]
