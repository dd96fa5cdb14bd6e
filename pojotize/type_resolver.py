"""Maps a single JSON value to the field type it infers.

The resolver only reads the registry; classes for nested objects and object
arrays are created by the schema builder before it asks for a field type.
"""

from typing import Any

from pojotize.common import singularize
from pojotize.schema_model import (BOOLEAN, FLOAT64, INTEGER64, OBJECT, STRING, UNTYPED,
                                   ClassRef, ClassRegistry, FieldType, ListOf)

JsonNode = Any


def resolve_field_type(node: JsonNode, property_name: str, registry: ClassRegistry) -> FieldType:
    """Resolves the field type for a JSON value.

    Only the first element of an array is sampled, so heterogeneous arrays
    take the type of whatever element comes first in the document. A null
    value becomes a reference to the class named like the property if that
    class already exists at the time of the call, and `Object` otherwise.

    Args:
        node: The parsed JSON value
        property_name: The JSON key holding the value
        registry: The classes discovered so far

    Returns:
        The inferred field type. Never raises for well-formed JSON values.
    """
    if isinstance(node, list):
        if len(node) == 0:
            return ListOf(OBJECT)
        return ListOf(_resolve_item_type(node[0], property_name))
    if isinstance(node, dict):
        return ClassRef(property_name)
    if node is None:
        if property_name in registry:
            return ClassRef(property_name)
        return OBJECT
    return _resolve_scalar_type(node)


def _resolve_item_type(first_item: JsonNode, property_name: str) -> FieldType:
    if isinstance(first_item, dict):
        return ClassRef(singularize(property_name))
    if first_item is None:
        return OBJECT
    if isinstance(first_item, list):
        return UNTYPED
    return _resolve_scalar_type(first_item)


def _resolve_scalar_type(value: JsonNode) -> FieldType:
    # bool is a subclass of int
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return INTEGER64
    if isinstance(value, float):
        return FLOAT64
    if isinstance(value, str):
        return STRING
    return OBJECT
