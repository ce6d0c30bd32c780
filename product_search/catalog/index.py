"""
==============================================================================
Search Index Module
==============================================================================

In-memory full-text index over product names.

Analysis:
--------
    "Apple's iPhones" → ["apple", "iphone"]

1. Lowercase and split on anything that is not a letter or digit
   (any script, so "Наушники" and "日本茶" are terms too)
2. Drop the English possessive suffix ('s)
3. Drop English stop words
4. Strip plural endings (ies → y, es/s removed) from ASCII words

Ranking:
-------
A document matches when it shares at least one term with the query.
Score is the sum of tf * idf over the shared terms, divided by the
square root of the document length. Equal scores are ordered by
ascending identifier.

==============================================================================
"""

from __future__ import annotations

import logging
import math
import re
import threading
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Set

from product_search.catalog.models import Product
from product_search.core.exceptions import InvalidQueryError


# Module logger
logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)?")

STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "if",
    "in", "into", "is", "it", "no", "not", "of", "on", "or", "such",
    "that", "the", "their", "then", "there", "these", "they", "this",
    "to", "was", "will", "with",
})


def _stem(token: str) -> str:
    """Light plural stemming for ASCII words; other tokens are left alone."""
    if len(token) <= 3 or token.isdigit() or not token.isascii():
        return token
    if token.endswith("ies") and len(token) > 4:
        return token[:-3] + "y"
    if token.endswith(("sses", "shes", "ches", "xes")):
        return token[:-2]
    if token.endswith("s") and not token.endswith(("ss", "us", "is")):
        return token[:-1]
    return token


def analyze(text: str) -> List[str]:
    """
    Turn free text into index terms.

    Args:
        text: Product name or search query

    Returns:
        Terms in input order, duplicates kept (term frequency matters)
    """
    terms = []
    for raw in _TOKEN_PATTERN.findall(text.lower()):
        if raw.endswith("'s"):
            raw = raw[:-2]
        raw = raw.replace("'", "")
        if not raw or raw in STOP_WORDS:
            continue
        terms.append(_stem(raw))
    return terms


class SearchIndex:
    """
    Inverted index from name terms to product identifiers.

    Only names are held, never full records. All methods are safe to
    call from multiple threads.

    Example:
        >>> index = SearchIndex()
        >>> index.upsert(1, "iPhone 15 Pro")
        >>> index.upsert(2, "AirPods Pro")
        >>> sorted(index.query("pro", limit=10))
        [1, 2]
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._postings: Dict[str, Dict[int, int]] = defaultdict(dict)
        self._doc_terms: Dict[int, Counter] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._doc_terms)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._doc_terms

    # =========================================================================
    # MUTATION
    # =========================================================================

    def upsert(self, product_id: int, name: str) -> None:
        """Index a product name, replacing any previous entry for the id."""
        terms = Counter(analyze(name))
        with self._lock:
            self._remove_locked(product_id)
            self._doc_terms[product_id] = terms
            for term, freq in terms.items():
                self._postings[term][product_id] = freq

    def remove(self, product_id: int) -> None:
        """Drop a product from the index; unknown ids are ignored."""
        with self._lock:
            self._remove_locked(product_id)

    def _remove_locked(self, product_id: int) -> None:
        terms = self._doc_terms.pop(product_id, None)
        if terms is None:
            return
        for term in terms:
            postings = self._postings.get(term)
            if postings is None:
                continue
            postings.pop(product_id, None)
            if not postings:
                del self._postings[term]

    def build(self, products: Iterable[Product]) -> int:
        """
        Bulk-load products.

        Returns:
            Number of products indexed
        """
        count = 0
        for product in products:
            self.upsert(product.id, product.name)
            count += 1
        logger.info(f"Search index built with {count} products")
        return count

    # =========================================================================
    # QUERY
    # =========================================================================

    def query(self, text: str, limit: int) -> List[int]:
        """
        Rank product identifiers against free text.

        Args:
            text: Search text
            limit: Maximum number of identifiers returned

        Returns:
            Distinct identifiers, best match first

        Raises:
            InvalidQueryError: If text is empty or blank
        """
        if not text or not text.strip():
            raise InvalidQueryError()
        if limit <= 0:
            return []

        query_terms: Set[str] = set(analyze(text))
        if not query_terms:
            return []

        with self._lock:
            total_docs = len(self._doc_terms)
            scores: Dict[int, float] = defaultdict(float)

            for term in query_terms:
                postings = self._postings.get(term)
                if not postings:
                    continue
                idf = math.log(1 + total_docs / len(postings))
                for product_id, freq in postings.items():
                    scores[product_id] += freq * idf

            for product_id in scores:
                length = sum(self._doc_terms[product_id].values())
                scores[product_id] /= math.sqrt(length)

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [product_id for product_id, _ in ranked[:limit]]
