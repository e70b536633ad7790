"""Browse, search and analyze Claude Code conversation logs."""

from cc_convo.bm25 import BM25Scorer, CorpusIndex, build_index, tokenize
from cc_convo.normalizer import decode_and_normalize
from cc_convo.parser import parse_file
from cc_convo.search import search

__version__ = "0.1.0"

__all__ = [
    "BM25Scorer",
    "CorpusIndex",
    "build_index",
    "decode_and_normalize",
    "parse_file",
    "search",
    "tokenize",
]
