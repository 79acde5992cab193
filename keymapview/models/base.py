"""Base model for all keymapview Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all keymapview models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class KeymapViewBaseModel(BaseModel):
    """Base model class for all keymapview Pydantic models.

    Models are frozen: a parsed keymap is a value that can be handed to any
    number of readers without copying.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        use_enum_values=True,
    )

    def to_dict_full(self) -> dict[str, Any]:
        """Convert model to dictionary including all fields (even unset ones).

        Returns:
            Dictionary representation including all fields
        """
        return self.model_dump(by_alias=True, exclude_unset=False, mode="json")
