"""
API Middleware

Components:
===========
- error_handler: Global exception handling

Usage:
======
    from src.api.middleware import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from src.api.middleware.error_handler import setup_exception_handlers

__all__ = [
    "setup_exception_handlers",
]
