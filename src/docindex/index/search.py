"""Lexical search over a loaded index, mirroring the site search widget."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List

import numpy as np

from docindex.index.store import IndexStore
from docindex.models import Category
from docindex.utils.text import make_snippet, tokenize

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchResult:
    location: str
    page: str
    title: str
    category: str
    score: float
    snippet: str
    position: int


class Searcher:
    """BM25 ranking over record text, with a boost for title matches.

    Postings are built once per store; the store is immutable so the
    searcher can be shared between callers.
    """

    def __init__(
        self,
        store: IndexStore,
        *,
        title_boost: float = 2.0,
        k1: float = 1.2,
        b: float = 0.75,
    ) -> None:
        self.store = store
        self.title_boost = title_boost
        self.k1 = k1
        self.b = b

        text_postings: Dict[str, list[tuple[int, int]]] = {}
        title_postings: Dict[str, list[int]] = {}
        lengths: list[int] = []
        for position, record in enumerate(store):
            counts = Counter(tokenize(record.text))
            lengths.append(sum(counts.values()))
            for term, freq in counts.items():
                text_postings.setdefault(term, []).append((position, freq))
            for term in set(tokenize(record.title)):
                title_postings.setdefault(term, []).append(position)

        self._text_postings = {
            term: (
                np.array([doc for doc, _ in postings], dtype=np.int64),
                np.array([freq for _, freq in postings], dtype=np.float64),
            )
            for term, postings in text_postings.items()
        }
        self._title_postings = {
            term: np.array(docs, dtype=np.int64) for term, docs in title_postings.items()
        }
        self._doc_len = np.array(lengths, dtype=np.float64)
        self._avgdl = float(self._doc_len.mean()) if lengths and self._doc_len.mean() > 0 else 1.0
        self._categories = [record.category for record in store]
        LOGGER.debug("Built postings for %d terms over %d records", len(self._text_postings), len(store))

    def _scores(self, terms: Iterable[str]) -> np.ndarray:
        n_docs = len(self.store)
        scores = np.zeros(n_docs, dtype=np.float64)
        empty_ids = np.array([], dtype=np.int64)
        for term in set(terms):
            text_ids, freqs = self._text_postings.get(term, (empty_ids, np.array([])))
            title_ids = self._title_postings.get(term, empty_ids)
            df = len(np.union1d(text_ids, title_ids))
            if df == 0:
                continue
            idf = math.log(1.0 + (n_docs - df + 0.5) / (df + 0.5))
            if len(text_ids):
                norm = self.k1 * (1.0 - self.b + self.b * self._doc_len[text_ids] / self._avgdl)
                scores[text_ids] += idf * freqs * (self.k1 + 1.0) / (freqs + norm)
            if len(title_ids):
                scores[title_ids] += self.title_boost * idf
        return scores

    def search(
        self,
        query: str,
        *,
        top_k: int = 10,
        categories: Iterable[Category | str] | None = None,
    ) -> List[SearchResult]:
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        terms = tokenize(query)
        if not terms or not len(self.store):
            return []

        scores = self._scores(terms)
        if categories is not None:
            wanted = {Category(category) for category in categories}
            mask = np.array([category in wanted for category in self._categories], dtype=bool)
            scores[~mask] = 0.0

        candidates = np.flatnonzero(scores > 0)
        # stable sort keeps generation order between equal scores
        ranked = candidates[np.argsort(-scores[candidates], kind="stable")][:top_k]

        results: List[SearchResult] = []
        for position in ranked:
            record = self.store[int(position)]
            results.append(
                SearchResult(
                    location=record.location,
                    page=record.page,
                    title=record.title,
                    category=record.category.value,
                    score=float(scores[position]),
                    snippet=make_snippet(record.text, terms),
                    position=int(position),
                )
            )
        return results
