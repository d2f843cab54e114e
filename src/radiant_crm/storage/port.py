from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """Text key-value backend interface.

    Note (DIP): the persisted store depends on this interface, not on a concrete backend.
    """

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError
