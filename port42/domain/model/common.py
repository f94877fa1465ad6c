"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable; repositories return fresh copies after every
    write instead of mutating instances in place.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
