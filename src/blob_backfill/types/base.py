"""Reusable, strict base models for Beacon API data."""

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """
    A base model for Beacon API response envelopes.

    Field names are kept in snake_case, exactly as the Beacon API emits them.
    Unknown fields are ignored so that newer servers remain readable.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
        extra="ignore",
        frozen=True,
    )


class StrictBaseModel(ApiModel):
    """A strict, immutable pydantic base model that rejects unknown fields."""

    model_config = ApiModel.model_config | {"extra": "forbid"}
