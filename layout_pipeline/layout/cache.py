"""
Cache des sources de layout — mémoire du process, avec TTL.

On stocke le XML sérialisé de chaque module (jamais les arbres eux-mêmes) :
chaque lecture reconstruit des arbres neufs, propres à la requête.
"""
import hashlib
import logging
import time
from typing import Dict, Iterable, List, Optional, Tuple

log = logging.getLogger(__name__)

SerializedLayouts = List[Tuple[str, str]]  # [(module, xml)]


def cache_key(handle: str, module_names: Iterable[str]) -> str:
    fingerprint = hashlib.md5("|".join(module_names).encode("utf-8")).hexdigest()
    return f"layout_{handle}_{fingerprint}"


class LayoutSourceCache:
    def __init__(self, ttl: int = 3600):
        self.ttl = ttl
        self._entries: Dict[str, Tuple[float, SerializedLayouts]] = {}

    def get(self, key: str) -> Optional[SerializedLayouts]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        log.debug("Cache layout : hit %s", key)
        return list(value)

    def set(self, key: str, value: SerializedLayouts, ttl: Optional[int] = None) -> None:
        self._entries[key] = (time.monotonic() + (self.ttl if ttl is None else ttl), list(value))

    def clear(self) -> None:
        self._entries.clear()
