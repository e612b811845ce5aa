"""Catalog data models."""

from typing import Any
from typing import Dict
from typing import List

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class Category(BaseModel):
    """A named grouping of tools."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    icon: str = ""
    gradient: str = ""


class Tool(BaseModel):
    """A catalog entry describing one calculator, converter or utility."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable key used for routes and favorites")
    name: str
    description: str = ""
    category: Category
    icon: str = Field("", description="SVG path descriptor")
    views: int = Field(0, description="Static popularity seed, never updated at runtime")
    gradient: str = ""
    features: List[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("tool id must be non-empty")
        return value

    @property
    def path(self) -> str:
        """Literal workspace route for this tool."""
        return f"/tools/{self.id}"

    def snapshot(self) -> Dict[str, Any]:
        """JSON-serialisable copy persisted with favorites."""
        return self.model_dump(mode="json")

    @classmethod
    def from_snapshot(cls, data: Any) -> "Tool":
        """Rebuild a tool from a persisted snapshot; raises on malformed input.

        A bare category id is resolved through the category index, so ids that
        no longer exist land on the default category.
        """
        if isinstance(data, dict) and isinstance(data.get("category"), str):
            from toolbox_website.categories import category_index

            data = {**data, "category": category_index.by_id(data["category"])}
        return cls.model_validate(data)
