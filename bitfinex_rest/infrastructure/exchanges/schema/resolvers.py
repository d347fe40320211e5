"""Schema document resolvers for ``$ref`` lookups."""

import json
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

from bitfinex_rest.domain.exchanges.ports import SchemaResolverPort

BUNDLED_DEFINITIONS = "definitions.json"


def _document_name(uri: str) -> str:
    return uri.rstrip("/").rsplit("/", 1)[-1]


class MappingSchemaResolver(SchemaResolverPort):
    """Resolve schema documents from an in-memory mapping keyed by URI."""

    def __init__(self, documents: Mapping[str, dict[str, Any]]) -> None:
        self._documents = dict(documents)

    def resolve(self, uri: str) -> dict[str, Any]:
        try:
            return self._documents[uri]
        except KeyError:
            raise LookupError(f"Unknown schema document: {uri}") from None


class FileSchemaResolver(SchemaResolverPort):
    """Serve one definitions document from disk.

    Any ``$ref`` whose document name matches the file name resolves to the
    file contents, so ``definitions.json#/flatJsonSchema`` and
    ``doc/definitions.json#/flatJsonSchema`` both hit ``/etc/x/definitions.json``.
    The document is read once and cached.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._document: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return self._path.name

    def _read(self) -> str:
        return self._path.read_text(encoding="utf-8")

    def resolve(self, uri: str) -> dict[str, Any]:
        if _document_name(uri) != self.name:
            raise LookupError(f"Unknown schema document: {uri}")
        if self._document is None:
            self._document = json.loads(self._read())
        return self._document


class BundledSchemaResolver(FileSchemaResolver):
    """Serve the definitions document shipped inside the package."""

    def __init__(self) -> None:
        super().__init__(BUNDLED_DEFINITIONS)

    def _read(self) -> str:
        resource = resources.files("bitfinex_rest") / "resources" / BUNDLED_DEFINITIONS
        return resource.read_text(encoding="utf-8")
