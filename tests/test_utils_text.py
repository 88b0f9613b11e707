"""Tests for text utility functions."""

from __future__ import annotations

from docindex.utils.text import make_snippet, tokenize


class TestTokenize:
    """Test tokenize function."""

    def test_lowercases_words(self) -> None:
        assert tokenize("Creates an OMCSession") == ["creates", "an", "omcsession"]

    def test_dotted_identifier(self) -> None:
        """Qualified names are kept and split into parts."""
        assert tokenize("ModelicaScriptingTools.simulate") == [
            "modelicascriptingtools.simulate",
            "modelicascriptingtools",
            "simulate",
        ]

    def test_trailing_dot_not_kept(self) -> None:
        assert tokenize("End of sentence.") == ["end", "of", "sentence"]

    def test_punctuation_and_signature(self) -> None:
        assert tokenize("moescape(s:: String)") == ["moescape", "s", "string"]

    def test_underscores(self) -> None:
        assert tokenize("get_rmsd") == ["get_rmsd"]

    def test_empty(self) -> None:
        assert tokenize("") == []
        assert tokenize("  !? ") == []


class TestMakeSnippet:
    """Test make_snippet function."""

    def test_short_text_flattened(self) -> None:
        assert make_snippet("line one\n\nline  two") == "line one line two"

    def test_long_text_truncated(self) -> None:
        snippet = make_snippet("word " * 100, max_chars=50)

        assert snippet.endswith("...")
        assert not snippet.startswith("...")
        assert len(snippet) <= 53

    def test_centres_on_term(self) -> None:
        text = "filler " * 60 + "needle " + "filler " * 60

        snippet = make_snippet(text, ["needle"], max_chars=60)

        assert "needle" in snippet
        assert snippet.startswith("...")
        assert snippet.endswith("...")

    def test_missing_term_uses_start(self) -> None:
        snippet = make_snippet("abc " * 100, ["zzz"], max_chars=40)

        assert snippet.startswith("abc")
