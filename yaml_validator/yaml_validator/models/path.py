from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class FieldSegment:
    name: str

    def __str__(self) -> str:
        return f".{self.name}"


@dataclass(frozen=True)
class IndexSegment:
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


PathSegment = Union[FieldSegment, IndexSegment]


def jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


@dataclass(frozen=True)
class YamlPath:
    """Location of a value inside a document, from the root.

    Paths are immutable; ``child`` and ``index`` return extended copies so a
    path can be shared between sibling branches of a validation run.
    """

    segments: Tuple[PathSegment, ...] = ()

    def child(self, name: str) -> YamlPath:
        return YamlPath(self.segments + (FieldSegment(str(name)),))

    def index(self, index: int) -> YamlPath:
        return YamlPath(self.segments + (IndexSegment(index),))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def to_pointer(self) -> str:
        """Render as a JSON pointer, matching the keys of a YAML source map."""
        tokens = []
        for segment in self.segments:
            if isinstance(segment, FieldSegment):
                tokens.append(jp_escape(segment.name))
            else:
                tokens.append(str(segment.index))
        return "".join(f"/{token}" for token in tokens)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        # root renders as an empty prefix: "", ".name", "[2].age"
        return "".join(str(segment) for segment in self.segments)


ROOT = YamlPath()
