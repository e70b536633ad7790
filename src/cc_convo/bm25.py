"""BM25 ranking over in-memory documents.

The index is rebuilt for every search: there is no persistence and no
incremental update. Note that idf goes negative for terms that appear in
more than half of the corpus, so a document can contain every query term
and still score <= 0. Only documents scoring strictly above zero count
as matches.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from cc_convo.config import BM25_B, BM25_K1


def tokenize(text: str) -> list[str]:
    """Lowercase and split on whitespace."""
    return [token for token in text.lower().split() if token]


@dataclass(frozen=True)
class CorpusIndex:
    """Collection-wide statistics for BM25."""

    doc_count: int = 0
    avg_doc_length: float = 0.0
    doc_frequencies: dict[str, int] = field(default_factory=dict)

    def df(self, term: str) -> int:
        """Number of documents containing ``term`` at least once."""
        return self.doc_frequencies.get(term, 0)


def build_index(documents: Iterable[str]) -> CorpusIndex:
    """Compute document frequencies and average length over a corpus."""
    doc_count = 0
    total_length = 0
    doc_frequencies: Counter[str] = Counter()

    for doc in documents:
        tokens = tokenize(doc)
        doc_count += 1
        total_length += len(tokens)
        doc_frequencies.update(set(tokens))

    avg_doc_length = total_length / doc_count if doc_count > 0 else 0.0
    return CorpusIndex(
        doc_count=doc_count,
        avg_doc_length=avg_doc_length,
        doc_frequencies=dict(doc_frequencies),
    )


class BM25Scorer:
    """Scores documents against a query using a corpus index."""

    def __init__(self, index: CorpusIndex, k1: float = BM25_K1, b: float = BM25_B) -> None:
        self.index = index
        self.k1 = k1
        self.b = b

    def idf(self, term: str) -> float:
        n = self.index.doc_count
        df = self.index.df(term)
        return math.log((n - df + 0.5) / (df + 0.5))

    def score(self, query: str, document: str) -> float:
        return self.score_tokens(tokenize(query), tokenize(document))

    def score_tokens(self, query_terms: Sequence[str], doc_terms: Sequence[str]) -> float:
        """Score pre-tokenized input.

        Every occurrence of a term in the query contributes, so a repeated
        query term counts twice. Terms absent from the document add nothing.
        """
        if self.index.avg_doc_length == 0:
            return 0.0

        term_freqs = Counter(doc_terms)
        length_ratio = len(doc_terms) / self.index.avg_doc_length
        norm = self.k1 * (1 - self.b + self.b * length_ratio)

        score = 0.0
        for term in query_terms:
            tf = term_freqs.get(term)
            if not tf:
                continue
            tf_component = tf * (self.k1 + 1) / (tf + norm)
            score += self.idf(term) * tf_component
        return score

    def rank(self, query: str, documents: Sequence[str]) -> list[tuple[int, float]]:
        """Return ``(position, score)`` for matching documents, best first.

        Only scores > 0 are kept. Ties keep document order.
        """
        query_terms = tokenize(query)
        if not query_terms:
            return []

        scored = []
        for position, doc in enumerate(documents):
            score = self.score_tokens(query_terms, tokenize(doc))
            # NaN fails this comparison too, so it never reaches the sort
            if score > 0:
                scored.append((position, score))

        # sorted() is stable, so equal scores stay in document order
        return sorted(scored, key=lambda item: item[1], reverse=True)
