"""GameSocio HTTP app: storage downloads at /storage, content routes under /api."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

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

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the database tables before serving."""
    from gamesocio.data.db import init_db

    init_db()
    yield


app = FastAPI(
    title="GameSocio API",
    description="Community API for game ideas, media, events, projects and portfolios",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(storage.router)
app.include_router(profiles.router, prefix="/api")
app.include_router(ideas.router, prefix="/api")
app.include_router(media.router, prefix="/api")
app.include_router(events.router, prefix="/api")
app.include_router(projects.router, prefix="/api")
app.include_router(portfolio.router, prefix="/api")


def main() -> None:
    """Run the API with uvicorn on port 8000."""
    import uvicorn

    uvicorn.run(
        "gamesocio.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
