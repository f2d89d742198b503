"""
Application package for the Perks API.

``core`` holds configuration, logging, database setup and the error
taxonomy; ``schemas`` the pydantic models; ``repositories`` the SQLite
store; ``services`` validation and business rules; ``api`` the
versioned FastAPI routers.
"""

from .main import app  # noqa: F401
