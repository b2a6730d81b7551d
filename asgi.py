"""
asgi.py -- Application assembly for the blogstack services.

Each service is an independent FastAPI app; nothing here joins them. This
module only gives uvicorn a single import location for both:

Run with:  uvicorn asgi:comments_app --port 4001
           uvicorn asgi:auth_app --port 3000
"""

from api.auth_service import app as auth_app
from api.comments_service import app as comments_app

__all__ = ["auth_app", "comments_app"]
