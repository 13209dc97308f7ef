"""Base model for Arena domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for invitations, battle matches and audit events.

    Entities are frozen. State changes produce a new instance through
    `model_copy(update=...)`, which is how repositories hand back the row a
    guarded transition wrote.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # NewType identifiers wrap UUID and str
    )
