"""Configuration for cc-convo."""

import os
from pathlib import Path

# Claude Code sessions location
PROJECTS_DIR = Path(
    os.environ.get("CC_CONVO_PROJECTS_DIR", Path.home() / ".claude" / "projects")
).expanduser()

# BM25 parameters
BM25_K1 = 1.2  # term frequency saturation
BM25_B = 0.75  # length normalization

# Search presentation
SNIPPET_CONTEXT_CHARS = 100
HIGHLIGHT_MIN_WORD_LEN = 3
HIGHLIGHT_STYLE = "bold yellow"
MATCHES_PER_SESSION = 3

# Session listing
PREVIEW_CHARS = 60

# Estimated cost in USD per 1000 tokens
INPUT_COST_PER_1K = 0.015
OUTPUT_COST_PER_1K = 0.075


def estimate_cost(input_tokens: int, output_tokens: int) -> float:
    """Estimate the USD cost of a token count."""
    return (input_tokens * INPUT_COST_PER_1K + output_tokens * OUTPUT_COST_PER_1K) / 1000
