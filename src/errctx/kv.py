from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class KV(dict[str, Any]):
    """Dynamic set of key/value pairs carried alongside an error or context.

    A KV is immutable by convention: ``copy``, ``set`` and ``merge`` always
    build a new instance and never write into one the caller already holds.
    """

    def copy(self) -> KV:
        """Return a shallow copy. Never returns ``None``."""
        return KV(self)

    def set(self, key: str, value: Any) -> KV:
        """Return a copy with *key* bound to *value*; ``self`` is unaffected."""
        nkv = self.copy()
        nkv[key] = value
        return nkv

    def string_pairs(self, replace_quotes: bool = True) -> list[tuple[str, str]]:
        """Render every entry as ``(key, str(value))`` sorted by key.

        Double quotes in the rendered value become single quotes unless
        *replace_quotes* is false; some log shippers choke on escaped quotes.
        """
        pairs: list[tuple[str, str]] = []
        for key, value in self.items():
            text = str(value)
            if replace_quotes:
                text = text.replace('"', "'")
            pairs.append((key, text))
        pairs.sort(key=lambda pair: pair[0])
        return pairs


def merge(*kvs: Mapping[str, Any] | None) -> KV:
    """Union of *kvs*; keys further right win. Never returns ``None``."""
    kv = KV()
    for item in kvs:
        if item:
            kv.update(item)
    return kv
