"""Memorable names for sessions.

A session id is a UUID, which is hard to remember and to type. Each id is
also given a short name such as ``tall-crimson-otter``. The name is derived
only from the id, so it is the same on every run and on every machine.
"""

import random

import coolname


def session_name(session_id: str) -> str:
    """Deterministic three-word name for a session id."""
    # A str seed is hashed with SHA-512, so it does not vary between runs
    coolname.replace_random(random.Random(session_id))
    try:
        return coolname.generate_slug(3)
    finally:
        coolname.replace_random(None)
