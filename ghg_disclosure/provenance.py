# -*- coding: utf-8 -*-
"""
Report provenance hashing.

Every result model carries a SHA-256 hash of its own content so that a
report handed to the presentation layer can be checked for tampering and
compared across runs. Hashes contain no timestamps or random salt: the same
inputs always produce the same report and the same hash.

Example:
    >>> from ghg_disclosure.provenance import stamp, verify
    >>> report = stamp(report)
    >>> assert verify(report)
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

_HASH_FIELD = "provenance_hash"

# Top-level fields that never take part in the hash.
_UNHASHED_FIELDS = frozenset({_HASH_FIELD, "generated_at"})


def compute_hash(data: Any) -> str:
    """Compute a deterministic SHA-256 hash of a model or plain data.

    For pydantic models the ``provenance_hash`` field itself and the
    ``generated_at`` wall-clock stamp are excluded.
    """
    if isinstance(data, BaseModel):
        exclude = set(_UNHASHED_FIELDS.intersection(type(data).model_fields)) or None
        serializable = data.model_dump(mode="json", exclude=exclude)
    else:
        serializable = data
    raw = json.dumps(serializable, sort_keys=True, default=str)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def stamp(model: ModelT) -> ModelT:
    """Return a copy of ``model`` with its provenance hash filled in."""
    return model.model_copy(update={_HASH_FIELD: compute_hash(model)})


def verify(model: BaseModel) -> bool:
    """Check that a stamped model's hash matches its content."""
    return getattr(model, _HASH_FIELD, None) == compute_hash(model)


__all__ = ["compute_hash", "stamp", "verify"]
