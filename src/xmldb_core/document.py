"""Document nodes: the ordered forest handed to the serializer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(slots=True)
class Text:
    value: str


@dataclass(slots=True)
class Element:
    """A named element.  A Text child is always the only child."""

    name: str
    children: list[DocumentNode] = field(default_factory=list)

    @property
    def text(self) -> str | None:
        if len(self.children) == 1 and isinstance(self.children[0], Text):
            return self.children[0].value
        return None


DocumentNode = Union[Element, Text]
