"""Route handlers for the API."""

from gamesocio.api.routes import (
    events,
    health,
    ideas,
    media,
    portfolio,
    profiles,
    projects,
    storage,
)

__all__ = [
    "health",
    "profiles",
    "ideas",
    "media",
    "events",
    "projects",
    "portfolio",
    "storage",
]
