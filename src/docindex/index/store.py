"""Loading and serializing the static search index."""

from __future__ import annotations

import hashlib
import json
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from docindex.errors import MalformedIndexError
from docindex.models import Category, IndexRecord, IndexStats, PageSummary

LOGGER = logging.getLogger(__name__)

DEFAULT_JS_VARIABLE = "documenterSearchIndex"

_JS_ASSIGNMENT = re.compile(r"^\s*(?:var|let|const)\s+([A-Za-z_$][\w$]*)\s*=\s*")


class _WireRecord(BaseModel):
    """Schema of a single serialized record."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    location: str
    page: str
    title: str
    text: str
    category: Literal["page", "section", "function", "type", "method"]


def _strip_js_wrapper(text: str) -> str:
    match = _JS_ASSIGNMENT.match(text)
    if match is None:
        return text
    LOGGER.debug("Stripping JavaScript assignment to %s", match.group(1))
    body = text[match.end() :].rstrip()
    if body.endswith(";"):
        body = body[:-1]
    return body


def _validate_record(position: int, item: Any) -> IndexRecord:
    if not isinstance(item, dict):
        raise MalformedIndexError(
            f"expected an object, got {type(item).__name__}", position=position
        )
    for field in _WireRecord.model_fields:
        value = item.get(field)
        if not isinstance(value, str):
            continue
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            # lone surrogates from \uXXXX escapes cannot be written back out
            raise MalformedIndexError(
                "not encodable as UTF-8", position=position, field=field
            ) from exc
    try:
        wire = _WireRecord.model_validate(item)
    except ValidationError as exc:
        error = exc.errors()[0]
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else None
        raise MalformedIndexError(error["msg"], position=position, field=field) from exc
    return IndexRecord(
        location=wire.location,
        page=wire.page,
        title=wire.title,
        text=wire.text,
        category=Category(wire.category),
    )


def parse_index(text: str) -> Tuple[IndexRecord, ...]:
    """Parse serialized index text, bare JSON or the JavaScript asset form.

    Raises:
        MalformedIndexError: if the payload is not valid JSON or any record
            does not match the schema.
    """
    try:
        payload = json.loads(_strip_js_wrapper(text))
    except json.JSONDecodeError as exc:
        raise MalformedIndexError(f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedIndexError("top-level value must be an object")
    if "docs" not in payload:
        raise MalformedIndexError("missing 'docs' field")
    docs = payload["docs"]
    if not isinstance(docs, list):
        raise MalformedIndexError("'docs' must be a list")

    return tuple(_validate_record(position, item) for position, item in enumerate(docs))


def load_index(path: Path | str) -> Tuple[IndexRecord, ...]:
    """Read every record of the index stored at ``path``, in generation order."""
    path = Path(path)
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedIndexError(f"invalid UTF-8: {exc}") from exc
    records = parse_index(text)
    LOGGER.debug("Loaded %d records from %s", len(records), path)
    return records


def dump_index(records: Iterable[IndexRecord], *, js_variable: str | None = None) -> str:
    """Serialize records in the generator's compact layout."""
    docs = ",".join(
        json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":"))
        for record in records
    )
    body = '{"docs":\n[' + docs + "]\n}"
    if js_variable is None:
        return body + "\n"
    return f"var {js_variable} = {body}\n"


def write_index(records: Iterable[IndexRecord], path: Path | str) -> Path:
    """Write records to ``path``; ``.js`` targets get the JavaScript wrapper."""
    path = Path(path)
    js_variable = DEFAULT_JS_VARIABLE if path.suffix.lower() == ".js" else None
    path.write_text(dump_index(records, js_variable=js_variable), encoding="utf-8")
    return path


class IndexStore:
    """Read-only view over a loaded index."""

    def __init__(self, records: Iterable[IndexRecord], *, source: Path | None = None) -> None:
        self._records: Tuple[IndexRecord, ...] = tuple(records)
        self.source = source

    @classmethod
    def from_path(cls, path: Path | str) -> "IndexStore":
        path = Path(path)
        return cls(load_index(path), source=path)

    @property
    def records(self) -> Tuple[IndexRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[IndexRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> IndexRecord:
        return self._records[index]

    def by_category(self, *categories: Category | str) -> List[IndexRecord]:
        wanted = {Category(category) for category in categories}
        return [record for record in self._records if record.category in wanted]

    def by_location(self, location: str) -> List[IndexRecord]:
        """All records anchored at ``location``; overloads share anchors."""
        return [record for record in self._records if record.location == location]

    def pages(self) -> List[PageSummary]:
        """Summaries per page path, in order of first appearance."""
        grouped: dict[str, List[IndexRecord]] = {}
        for record in self._records:
            grouped.setdefault(record.path, []).append(record)

        summaries: List[PageSummary] = []
        for path, records in grouped.items():
            categories: list[str] = []
            for record in records:
                if record.category.value not in categories:
                    categories.append(record.category.value)
            summaries.append(
                PageSummary(
                    page=records[0].page,
                    path=path,
                    record_count=len(records),
                    categories=tuple(categories),
                )
            )
        return summaries

    def stats(self) -> IndexStats:
        counts = Counter(record.category.value for record in self._records)
        return IndexStats(
            record_count=len(self._records),
            page_count=len({record.path for record in self._records}),
            by_category={category.value: counts.get(category.value, 0) for category in Category},
        )

    def fingerprint(self) -> str:
        """SHA256 of the canonical serialized form."""
        return hashlib.sha256(dump_index(self._records).encode("utf-8")).hexdigest()

    def dump(self, *, js_variable: str | None = None) -> str:
        return dump_index(self._records, js_variable=js_variable)
