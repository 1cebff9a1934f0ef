"""Identity of the user performing an action."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CurrentUser:
    """Acting identity passed explicitly into every write.

    Attributes:
        id: Identity-provider user id; equals the owning ``profiles.id``.
        username: Display handle from the user's profile.
    """

    id: str
    username: str
