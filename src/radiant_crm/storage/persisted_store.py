from __future__ import annotations

import json
import logging
from typing import Any

from .port import KeyValueStorage

logger = logging.getLogger(__name__)


class PersistedStore:
    """Typed slots over a text key-value backend.

    Every read parses and every write serializes; failures are logged and
    swallowed (reads fall back to the caller's default).
    """

    def __init__(self, backend: KeyValueStorage):
        self._backend = backend

    def read(self, key: str, default: Any) -> Any:
        try:
            raw = self._backend.get_item(key)
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read slot %r", key)
            return default

        if raw is None:
            return default

        try:
            return json.loads(raw)
        except ValueError:
            logger.error("Slot %r holds invalid JSON; using default", key)
            return default

    def write(self, key: str, value: Any) -> None:
        try:
            text = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            logger.exception("Failed to serialize slot %r", key)
            return

        try:
            self._backend.set_item(key, text)
        except OSError:
            logger.exception("Failed to write slot %r", key)
