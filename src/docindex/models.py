"""Core docindex data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Category(str, Enum):
    """Documentation role of a record."""

    PAGE = "page"
    SECTION = "section"
    FUNCTION = "function"
    TYPE = "type"
    METHOD = "method"


@dataclass(frozen=True, slots=True)
class IndexRecord:
    """One searchable unit of documentation content."""

    location: str
    page: str
    title: str
    text: str
    category: Category

    @property
    def path(self) -> str:
        return self.location.partition("#")[0]

    @property
    def fragment(self) -> str | None:
        _, sep, fragment = self.location.partition("#")
        return fragment if sep else None

    def url(self, base_url: str = "") -> str:
        if not base_url:
            return self.location
        return f"{base_url.rstrip('/')}/{self.location}"

    def to_dict(self) -> Dict[str, str]:
        return {
            "location": self.location,
            "page": self.page,
            "title": self.title,
            "text": self.text,
            "category": self.category.value,
        }


@dataclass(frozen=True, slots=True)
class PageSummary:
    """Records of one documentation page, grouped by page path."""

    page: str
    path: str
    record_count: int
    categories: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class IndexStats:
    record_count: int
    page_count: int
    by_category: Dict[str, int]
