"""Identifier generation for samples.

Samples are hashed and compared by their identifier, so every sample
constructed without an explicit id must receive a fresh one.
"""

from __future__ import annotations

from uuid import UUID, uuid4


def new_sample_id() -> UUID:
    return uuid4()
