"""Schema resolution and schema-validated set extraction."""

from .extractor import SchemaSetExtractor, extract_string_set
from .resolvers import BundledSchemaResolver, FileSchemaResolver, MappingSchemaResolver

__all__ = [
    "SchemaSetExtractor",
    "extract_string_set",
    "BundledSchemaResolver",
    "FileSchemaResolver",
    "MappingSchemaResolver",
]
