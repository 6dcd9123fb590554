"""
ASGI entry point for the buddy tracker service (``uvicorn app:app``).

The application is assembled from the environment in `buddy_core.api.main`.
"""

from buddy_core.api.main import app  # noqa: F401
