"""SchemaResolverPort - resolves the document part of a JSON-Schema ``$ref``."""

from abc import ABC, abstractmethod
from typing import Any


class SchemaResolverPort(ABC):
    """Abstract resolver for schema documents.

    Only the document URI is resolved here; the ``#/json/pointer``
    fragment is walked by the caller.
    """

    @abstractmethod
    def resolve(self, uri: str) -> dict[str, Any]:
        """Load the schema document identified by ``uri``.

        Raises:
            LookupError: If the document is unknown to this resolver.
        """
        pass
