# =============================================================================
# app/handlers/home.py - Home Page
# =============================================================================

from app.config import get_settings


def home_get():
    """Show the home page."""
    return {"message": f"Welcome to {get_settings().APP_NAME}"}
