"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_INDEX_CANDIDATES = (
    Path("build/search_index.js"),
    Path("docs/build/search_index.js"),
    Path("dev/search_index.js"),
)


def _get_default_index_path() -> Path:
    """Pick the first generated index found under the working directory."""
    for candidate in DEFAULT_INDEX_CANDIDATES:
        if candidate.exists():
            return candidate
    # Fall back to the generator's usual output location
    return DEFAULT_INDEX_CANDIDATES[0]


@dataclass(slots=True)
class AppConfig:
    index_path: Path | None = None
    top_k: int = 10
    title_boost: float = 2.0
    base_url: str = ""

    def __post_init__(self) -> None:
        if self.index_path is None:
            self.index_path = _get_default_index_path()

    def resolve_index_path(self, base_dir: Path | None = None) -> Path:
        if self.index_path is None:
            self.index_path = _get_default_index_path()
        if Path(self.index_path).is_absolute() or base_dir is None:
            return Path(self.index_path)
        return base_dir / self.index_path
