"""Whatdo domain model.

A whatdo is one node in the task tree. Leaves are units of work; whatdos
with children are groupings whose leaves are worked through in priority or
queue order. Uses Pydantic so that the loader and the CLI validate through
the same rules.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validation import validate_id, validate_tag


def deslugify(value: str) -> str:
    """Turn an id like ``read-back_whatdos`` into ``Read back whatdos``."""
    text = value.replace("_", " ").replace("-", " ")
    return text[:1].upper() + text[1:]


class Whatdo(BaseModel):
    """A node in the whatdo tree.

    Children are owned exclusively by their parent. ``queue`` only refers to
    descendants by id and never owns them.
    """

    model_config = ConfigDict(strict=True)

    id: str
    summary: str | None = None
    children: list["Whatdo"] = Field(default_factory=list)
    queue: list[str] | None = None
    priority: int | None = None
    tags: list[str] | None = None
    branch_name: str | None = None

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        return validate_id(value)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str] | None) -> list[str] | None:
        if value is not None:
            for tag in value:
                validate_tag(tag)
        return value

    @property
    def display_summary(self) -> str:
        """Summary to show to the user, derived from the id when unset."""
        if self.summary is not None:
            return self.summary
        return deslugify(self.id)

    @property
    def reference_name(self) -> str:
        """Name used to correlate this whatdo with a git branch."""
        return self.branch_name or self.id

    @property
    def terse(self) -> bool:
        """Whether this whatdo can be written as a bare summary string."""
        return (
            self.summary is not None
            and not self.children
            and self.queue is None
            and self.priority is None
            and self.tags is None
            and self.branch_name is None
        )

    def is_leaf(self) -> bool:
        """Check if this whatdo is a unit of work (has no children)."""
        return len(self.children) == 0

    def __str__(self) -> str:
        return f"{self.id}: {self.display_summary}"


Whatdo.model_rebuild()
