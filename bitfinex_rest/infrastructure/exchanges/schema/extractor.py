"""Schema-validated extraction of value sets from flat JSON arrays.

The input is tokenized into a stream of events which drive an explicit
finite-state machine:

    EXPECT_ARRAY_START --START_ARRAY--> EXPECT_VALUE_OR_END
    EXPECT_VALUE_OR_END --VALUE-------> EXPECT_VALUE_OR_END
    EXPECT_VALUE_OR_END --END_ARRAY---> DONE

Every other (state, event) pair is a schema violation. Nothing is returned
unless the whole document is consumed successfully.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from bitfinex_rest.config.logging import get_logger
from bitfinex_rest.domain.exchanges.exceptions import ParseError, SchemaExtractionError, SchemaViolation
from bitfinex_rest.domain.exchanges.ports import SchemaResolverPort

logger = get_logger(__name__)

_WHITESPACE = " \t\n\r"
_MAX_REF_DEPTH = 8

_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "null": lambda v: v is None,
}


class State(str, Enum):
    """Extractor FSM states."""

    EXPECT_ARRAY_START = "expect_array_start"
    EXPECT_VALUE_OR_END = "expect_value_or_end"
    DONE = "done"


class EventKind(str, Enum):
    """Events produced by the tokenizer."""

    START_ARRAY = "start_array"
    VALUE = "value"
    END_ARRAY = "end_array"


TRANSITIONS: dict[tuple[State, EventKind], State] = {
    (State.EXPECT_ARRAY_START, EventKind.START_ARRAY): State.EXPECT_VALUE_OR_END,
    (State.EXPECT_VALUE_OR_END, EventKind.VALUE): State.EXPECT_VALUE_OR_END,
    (State.EXPECT_VALUE_OR_END, EventKind.END_ARRAY): State.DONE,
}


@dataclass(frozen=True)
class Event:
    kind: EventKind
    offset: int
    value: Any = None


@dataclass(frozen=True)
class FlatArraySchema:
    """Compiled ``{"type": "array", "items": {"type": <scalar>}}`` schema."""

    item_type: str
    pointer: str

    def accepts(self, value: Any) -> bool:
        return _TYPE_CHECKS[self.item_type](value)


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _byte_offset(text: str, pos: int) -> int:
    return len(text[:pos].encode("utf-8"))


def tokenize(text: str) -> Iterator[Event]:
    """Yield array events for ``text``.

    Elements are decoded whole, so a nested array or object arrives as a
    single VALUE event and is rejected by the item type check.

    Raises:
        ParseError: If ``text`` is not well-formed JSON.
    """
    decoder = json.JSONDecoder()
    end_of_text = len(text)

    def decode(pos: int) -> tuple[Any, int]:
        if pos >= end_of_text:
            raise ParseError("Unexpected end of document", offset=_byte_offset(text, pos))
        try:
            return decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise ParseError(e.msg, offset=_byte_offset(text, e.pos)) from e

    def finish(pos: int) -> None:
        pos = _skip_ws(text, pos)
        if pos < end_of_text:
            raise ParseError("Extra data after document", offset=_byte_offset(text, pos))

    pos = _skip_ws(text, 0)
    if pos >= end_of_text or text[pos] != "[":
        value, end = decode(pos)
        yield Event(EventKind.VALUE, pos, value)
        finish(end)
        return

    yield Event(EventKind.START_ARRAY, pos)
    pos = _skip_ws(text, pos + 1)
    if pos < end_of_text and text[pos] == "]":
        yield Event(EventKind.END_ARRAY, pos)
        finish(pos + 1)
        return

    while True:
        value, end = decode(pos)
        yield Event(EventKind.VALUE, pos, value)
        pos = _skip_ws(text, end)
        if pos >= end_of_text:
            raise ParseError("Unexpected end of document", offset=_byte_offset(text, pos))
        if text[pos] == ",":
            pos = _skip_ws(text, pos + 1)
        elif text[pos] == "]":
            yield Event(EventKind.END_ARRAY, pos)
            finish(pos + 1)
            return
        else:
            raise ParseError("Expecting ',' delimiter", offset=_byte_offset(text, pos))


class SchemaSetExtractor:
    """Turn a flat JSON array into a frozenset, validated against a schema.

    Example:
        >>> extractor = SchemaSetExtractor(BundledSchemaResolver())
        >>> extractor.extract('["btcusd","ltcusd","btcusd"]', "definitions.json#/flatJsonSchema")
        frozenset({'btcusd', 'ltcusd'})
    """

    def __init__(self, resolver: SchemaResolverPort) -> None:
        self._resolver = resolver

    # --- schema resolution ---

    def _resolve_ref(self, ref: str, depth: int = 0) -> tuple[dict[str, Any], str]:
        uri, _, fragment = ref.partition("#")
        pointer = fragment or ""
        if depth > _MAX_REF_DEPTH:
            raise SchemaViolation("Schema $ref chain too deep", offset=0, keyword="$ref", schema_pointer=ref)
        try:
            document = self._resolver.resolve(uri)
        except LookupError as e:
            raise SchemaViolation(str(e), offset=0, keyword="$ref", schema_pointer=ref) from e
        except json.JSONDecodeError as e:
            raise ParseError(f"Schema document {uri}: {e.msg}", offset=e.pos) from e

        node: Any = document
        for token in pointer.split("/")[1:]:
            token = token.replace("~1", "/").replace("~0", "~")
            if isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            elif isinstance(node, dict) and token in node:
                node = node[token]
            else:
                raise SchemaViolation(
                    f"Unresolvable schema pointer {ref}", offset=0, keyword="$ref", schema_pointer=ref
                )
        if isinstance(node, dict) and "$ref" in node:
            return self._resolve_ref(node["$ref"], depth + 1)
        if not isinstance(node, dict):
            raise SchemaViolation("Schema must be an object", offset=0, keyword="$ref", schema_pointer=ref)
        return node, f"#{pointer}"

    def compile(self, schema_ref: str) -> FlatArraySchema:
        """Resolve ``schema_ref`` and check it describes a flat array.

        Raises:
            SchemaViolation: If the schema is missing or not a flat array schema.
        """
        schema, pointer = self._resolve_ref(schema_ref)
        declared = schema.get("type")
        if declared != "array" and not (isinstance(declared, list) and "array" in declared):
            raise SchemaViolation("Schema is not an array schema", offset=0, keyword="type", schema_pointer=pointer)
        items = schema.get("items")
        if not isinstance(items, dict) or items.get("type") not in _TYPE_CHECKS:
            raise SchemaViolation(
                "Schema items must declare a scalar type", offset=0, keyword="items", schema_pointer=pointer
            )
        return FlatArraySchema(item_type=items["type"], pointer=pointer)

    # --- extraction ---

    def _run(self, json_text: str, schema: FlatArraySchema) -> frozenset:
        state = State.EXPECT_ARRAY_START
        collected: set = set()
        index = 0

        for event in tokenize(json_text):
            next_state = TRANSITIONS.get((state, event.kind))
            if next_state is None:
                raise SchemaViolation(
                    f"Unexpected {event.kind.value} in state {state.value}",
                    offset=_byte_offset(json_text, event.offset),
                    keyword="type",
                    schema_pointer=schema.pointer,
                    document_pointer="",
                )
            if event.kind is EventKind.VALUE:
                if not schema.accepts(event.value):
                    raise SchemaViolation(
                        f"Item {index} is not of type {schema.item_type}",
                        offset=_byte_offset(json_text, event.offset),
                        keyword="type",
                        schema_pointer=f"{schema.pointer}/items",
                        document_pointer=f"/{index}",
                    )
                collected.add(event.value)
                index += 1
            state = next_state

        if state is not State.DONE:
            raise ParseError("Unexpected end of document", offset=_byte_offset(json_text, len(json_text)))
        return frozenset(collected)

    def extract(self, json_text: str, schema_ref: str) -> frozenset:
        """Validate ``json_text`` against ``schema_ref`` and collect its items.

        Duplicates collapse. On failure nothing is returned and the error is
        logged with its offset and keyword.

        Raises:
            ParseError: If the input is not well-formed JSON.
            SchemaViolation: If the input does not match the schema.
        """
        try:
            schema = self.compile(schema_ref)
            values = self._run(json_text, schema)
        except SchemaExtractionError as e:
            logger.warning("schema.extraction_failed", error_type=type(e).__name__, **e.context)
            raise

        logger.debug("schema.extracted", count=len(values), schema_ref=schema_ref)
        return values

    def extract_string_set(self, json_text: str, schema_ref: str) -> frozenset[str]:
        """Like ``extract`` but the schema must declare string items."""
        schema = self.compile(schema_ref)
        if schema.item_type != "string":
            raise SchemaViolation(
                "Schema items are not strings", offset=0, keyword="items", schema_pointer=schema.pointer
            )
        return self.extract(json_text, schema_ref)


def extract_string_set(
    json_text: str,
    schema_ref: str,
    resolver: SchemaResolverPort,
) -> frozenset[str]:
    """Functional shortcut for ``SchemaSetExtractor(resolver).extract_string_set``."""
    return SchemaSetExtractor(resolver).extract_string_set(json_text, schema_ref)
