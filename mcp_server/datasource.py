"""
Token source abstraction for the MCP server.

Provides a uniform interface for reading token sets and tokens, backed by
a host catalog.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from token_codec.domain.models import SerializedSet, SerializedToken
from token_codec.host.catalog import HostCatalog, InMemoryCatalog
from token_codec.host.serialization import serialize_set, serialize_token


class TokenSource(ABC):
    """Abstract interface for reading token sets."""

    @abstractmethod
    def list_sets(self) -> list[SerializedSet]:
        """Return summaries of all token sets."""

    @abstractmethod
    def list_tokens(self, set_id: str, token_type: str | None = None) -> list[SerializedToken]:
        """Return the tokens of one set. Raises SetNotFoundError if missing."""


class CatalogTokenSource(TokenSource):
    """Reads tokens from a live host catalog."""

    def __init__(self, catalog: HostCatalog):
        self._catalog = catalog

    def list_sets(self) -> list[SerializedSet]:
        return [serialize_set(s) for s in self._catalog.sets]

    def list_tokens(self, set_id: str, token_type: str | None = None) -> list[SerializedToken]:
        token_set = self._catalog.require_set(set_id)
        return [
            serialize_token(t) for t in token_set.tokens
            if token_type is None or t.type == token_type
        ]


class LocalTokenSource(CatalogTokenSource):
    """Reads tokens from a catalog JSON file on the local filesystem."""

    def __init__(self, catalog_path: str):
        path = Path(catalog_path)
        if not path.is_file():
            raise FileNotFoundError(f"Catalog file not found: {path}")
        with open(path, encoding="utf-8") as f:
            super().__init__(InMemoryCatalog.from_dict(json.load(f)))
