"""
OwnerElement - Immutable snapshot of an iframe element as seen in its parent DOM.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OwnerElement(BaseModel):
    """Static identity of the iframe tag that embeds a frame.

    Validation Rules:
    - dom_path is required and non-empty
    - empty src/id strings are stored as None
    - equality is structural over all three fields
    """

    model_config = ConfigDict(frozen=True)

    dom_path: str = Field(min_length=1)
    """CSS-like path to the iframe element inside its parent document."""

    src: Optional[str] = None
    """src attribute of the iframe element."""

    id: Optional[str] = None
    """id attribute of the iframe element."""

    @field_validator("src", "id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @classmethod
    def from_raw(
        cls,
        dom_path: Optional[str],
        src: Optional[str] = None,
        id: Optional[str] = None,
    ) -> Optional["OwnerElement"]:
        """Build an owner element from wire fields.

        Returns None when no DOM path is known: an owner element without a
        path is not a valid identity.
        """
        if not dom_path:
            return None
        return cls(dom_path=dom_path, src=src, id=id)

    def __str__(self) -> str:
        parts = [self.dom_path]
        if self.id:
            parts.append(f"#{self.id}")
        if self.src:
            parts.append(f"src={self.src}")
        return " ".join(parts)
