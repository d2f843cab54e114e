from __future__ import annotations

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def next_id(self, prefix: str) -> str:
        raise NotImplementedError


class UuidIdGenerator:
    """Collision-resistant ids of the form ``<prefix>-<uuid4 hex>``."""

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"
