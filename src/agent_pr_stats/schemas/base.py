"""Base schema class for canonical records."""

from collections.abc import Iterable
from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    """Base class for immutable, transport-agnostic records.

    Records accept both field names and wire aliases so that
    cached envelopes and freshly converted data validate the same way.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @classmethod
    def from_list(cls, items: Iterable[Any]) -> list[Self]:
        """
        Factory method to validate a list of raw dicts or model instances.

        Args:
            items: Raw dicts (field names or aliases) or compatible objects

        Returns:
            List of validated schema instances
        """
        return [cls.model_validate(item) for item in items]
