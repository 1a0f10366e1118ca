"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for ledger entities.

    Entities are frozen; a change is a new instance from ``model_copy``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
