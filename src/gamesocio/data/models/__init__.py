"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- Profile: Community member profile, owner of all content
- GameIdea / MediaPost: Upvotable content
- Event: Tournaments, hackathons and challenges
- Project / ProjectFeedback / CollaboratorRequest: Collaboration zone
- PortfolioItem: Profile showcase entries with an optional attachment
- OrphanedObject: Stored objects awaiting deferred deletion

All models inherit from the shared Base declarative class defined in data.db.
"""

from gamesocio.data.db import Base
from gamesocio.data.models.event import Event
from gamesocio.data.models.game_idea import GameIdea
from gamesocio.data.models.media_post import MediaPost
from gamesocio.data.models.orphaned_object import OrphanedObject
from gamesocio.data.models.portfolio_item import PortfolioItem
from gamesocio.data.models.profile import Profile
from gamesocio.data.models.project import CollaboratorRequest, Project, ProjectFeedback

__all__ = [
    "Base",
    "CollaboratorRequest",
    "Event",
    "GameIdea",
    "MediaPost",
    "OrphanedObject",
    "PortfolioItem",
    "Profile",
    "Project",
    "ProjectFeedback",
]
