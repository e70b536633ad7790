"""BM25 search over conversation timelines."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from cc_convo.bm25 import BM25Scorer, CorpusIndex, build_index
from cc_convo.config import BM25_B, BM25_K1, SNIPPET_CONTEXT_CHARS
from cc_convo.models import NormalizedEvent, SearchMatch
from cc_convo.parser import parse_file
from cc_convo.snippets import extract_snippet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchDocument:
    """A timeline event paired with the text indexed for it."""

    event: NormalizedEvent
    text: str


def document_text(event: NormalizedEvent) -> str:
    """Assemble the searchable text of an event.

    Content comes first, then the thinking block, then a ``[Tool: name]``
    marker so that tool names are searchable too.
    """
    text = event.content
    if event.thinking is not None:
        text += "\n" + event.thinking
    if event.tool_info is not None:
        text += f"\n[Tool: {event.tool_info.name}]"
    return text


def build_documents(events: Sequence[NormalizedEvent]) -> list[SearchDocument]:
    return [SearchDocument(event=event, text=document_text(event)) for event in events]


def search(
    index: CorpusIndex,
    query: str,
    documents: Sequence[SearchDocument],
    k1: float = BM25_K1,
    b: float = BM25_B,
    context_chars: int = SNIPPET_CONTEXT_CHARS,
) -> list[SearchMatch]:
    """Rank documents against a query.

    ``index`` must have been built from the texts of ``documents``.
    Returns matches with score > 0, best first; an empty or
    whitespace-only query returns no matches.
    """
    if not query.strip():
        return []

    scorer = BM25Scorer(index, k1=k1, b=b)
    ranked = scorer.rank(query, [doc.text for doc in documents])
    terms = query.lower().split()

    matches = []
    for position, score in ranked:
        doc = documents[position]
        matches.append(
            SearchMatch(
                timestamp=doc.event.timestamp,
                role=doc.event.role,
                snippet=extract_snippet(doc.text, terms, context_chars),
                score=score,
            )
        )
    return matches


def search_events(events: Sequence[NormalizedEvent], query: str) -> list[SearchMatch]:
    """Index a timeline from scratch and search it."""
    documents = build_documents(events)
    index = build_index(doc.text for doc in documents)
    return search(index, query, documents)


def search_session(path: Path, query: str) -> list[SearchMatch]:
    """Search one session file, using its own events as the corpus.

    Raises:
        OSError: If the file cannot be read.
    """
    if not query.strip():
        return []
    events = parse_file(path)
    matches = search_events(events, query)
    logger.debug("%s: %d of %d events matched %r", path, len(matches), len(events), query)
    return matches
