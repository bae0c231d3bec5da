"""Pydantic models describing the JSON batch tree description."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domsenricher.domain.model import NodeType


class TreeNodePayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: NodeType
    name: str = Field(min_length=1)
    location: str
    children: list[TreeNodePayload] = Field(default_factory=list)

    @field_validator("location", mode="before")
    @classmethod
    def _strip_location(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValueError("location must not be blank")
            return stripped
        return value
