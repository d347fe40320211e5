"""Ports (interfaces) for the Exchange bounded context."""

from .schema_resolver_port import SchemaResolverPort
from .transport_port import HttpTransportPort

__all__ = ["HttpTransportPort", "SchemaResolverPort"]
