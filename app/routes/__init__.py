# app/routes/__init__.py

# Import all route modules to make them available from app.routes
from app.routes import (
    health,
    users,
)
