"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from docindex.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should create config with default values."""
        monkeypatch.chdir(tmp_path)
        config = AppConfig()

        assert config.index_path == Path("build/search_index.js")
        assert config.top_k == 10
        assert config.title_boost == 2.0
        assert config.base_url == ""

    def test_default_discovers_existing_index(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should prefer an index that already exists."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "docs" / "build").mkdir(parents=True)
        (tmp_path / "docs" / "build" / "search_index.js").write_text("{}")

        assert AppConfig().index_path == Path("docs/build/search_index.js")

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(
            index_path=Path("/custom/search_index.js"),
            top_k=5,
            title_boost=3.0,
            base_url="https://example.org",
        )

        assert config.index_path == Path("/custom/search_index.js")
        assert config.top_k == 5
        assert config.title_boost == 3.0

    def test_resolve_absolute(self) -> None:
        """Should return absolute path as-is."""
        config = AppConfig(index_path=Path("/absolute/search_index.js"))

        assert config.resolve_index_path(Path("/base")) == Path("/absolute/search_index.js")

    def test_resolve_relative_no_base(self) -> None:
        config = AppConfig(index_path=Path("relative/search_index.js"))

        assert config.resolve_index_path(base_dir=None) == Path("relative/search_index.js")

    def test_resolve_relative_with_base(self) -> None:
        """Should resolve relative path against base_dir."""
        config = AppConfig(index_path=Path("relative/search_index.js"))

        resolved = config.resolve_index_path(base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/relative/search_index.js")
