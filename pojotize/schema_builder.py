"""Builds a class registry from a single JSON document.

The build runs in two passes:

1. A depth-first walk over the document. Every nested object creates (or
   reuses) a class named after its property; every array whose first element
   is an object creates (or reuses) a class named after the singularized
   property. Field types are resolved as soon as the value's subtree has been
   walked, against the classes known at that moment.
2. A finalization pass over all classes in creation order that fixes each
   class's field list in property name order.

Class identity is the derived name alone. Two unrelated objects stored under
the same property name anywhere in the document become one class whose fields
are the union of both; if they disagree on a field's type the later visit
wins, unless the builder runs in strict mode. In strict mode two different
concrete types raise FieldTypeConflictError, and an untyped fallback (from a
null or an empty array) never replaces a concrete type seen earlier.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from pojotize.common import singularize
from pojotize.errors import FieldTypeConflictError, InvalidInputError
from pojotize.schema_model import ClassModel, ClassRegistry, FieldModel, is_fallback_type
from pojotize.type_resolver import resolve_field_type

# Configure module logger
logger = logging.getLogger(__name__)

JsonNode = Dict[str, 'JsonNode'] | list | str | bool | int | float | None
ProgressCallback = Callable[[float], None]


@dataclass
class _WalkFrame:
    """One object being walked: its class, its remaining properties and the property waiting on a nested walk."""
    clazz: ClassModel
    properties: Iterator[Tuple[str, JsonNode]]
    pending: Optional[Tuple[str, JsonNode]] = None


class SchemaBuilder:
    """Infers classes and fields from a JSON document."""

    def __init__(self, progress: Optional[ProgressCallback] = None, strict: bool = False) -> None:
        """Initialize the schema builder.

        Args:
            progress: Optional sink called once per class during finalization
                with the fraction of classes completed
            strict: Raise FieldTypeConflictError when a merged class sees two
                different concrete types for the same property
        """
        self.progress = progress
        self.strict = strict
        self.registry = ClassRegistry()

    def build(self, root_class_name: str, root_node: JsonNode) -> ClassRegistry:
        """Infers the class registry for a JSON document.

        Args:
            root_class_name: Name of the class created for the root object
            root_node: The parsed JSON document; must be an object

        Returns:
            The finished registry, root class first.
        """
        if not root_class_name:
            raise InvalidInputError("Root class name must not be empty")
        if not isinstance(root_node, dict):
            raise InvalidInputError(
                f"Document root must be a JSON object, not {_kind_of(root_node)}",
                context=root_class_name)

        self.registry = ClassRegistry()
        root_class = self._get_or_create_class(root_class_name)
        self._walk(root_class, root_node)
        self._finalize()
        return self.registry

    def _walk(self, root_class: ClassModel, root_node: Dict[str, Any]) -> None:
        # Depth-first over an explicit stack of frames. A property that descends into
        # a nested class stays pending on its frame until the nested frame is popped,
        # so its field type is resolved after its whole subtree.
        stack: List[_WalkFrame] = [_WalkFrame(root_class, iter(root_node.items()))]
        while stack:
            frame = stack[-1]
            if frame.pending is not None:
                property_name, child_node = frame.pending
                frame.pending = None
                self._resolve_field(frame.clazz, property_name, child_node)

            entry = next(frame.properties, None)
            if entry is None:
                stack.pop()
                continue

            property_name, child_node = entry
            nested = self._nested_class(property_name, child_node)
            if nested is None:
                self._resolve_field(frame.clazz, property_name, child_node)
            else:
                nested_class, nested_node = nested
                frame.pending = entry
                stack.append(_WalkFrame(nested_class, iter(nested_node.items())))

    def _nested_class(self, property_name: str,
                      child_node: JsonNode) -> Optional[Tuple[ClassModel, Dict[str, Any]]]:
        """The class and object to descend into for a property, if any."""
        if isinstance(child_node, list):
            if len(child_node) > 0 and isinstance(child_node[0], dict):
                return self._get_or_create_class(singularize(property_name)), child_node[0]
        elif isinstance(child_node, dict):
            return self._get_or_create_class(property_name), child_node
        return None

    def _resolve_field(self, clazz: ClassModel, property_name: str, child_node: JsonNode) -> None:
        field_type = resolve_field_type(child_node, property_name, self.registry)
        self._put_field(clazz, FieldModel(property_name, field_type))

    def _get_or_create_class(self, class_name: str) -> ClassModel:
        clazz, created = self.registry.get_or_create(class_name)
        if created:
            logger.debug("Created class %s", class_name)
        else:
            logger.debug("Merging fields into existing class %s", class_name)
        return clazz

    def _put_field(self, clazz: ClassModel, new_field: FieldModel) -> None:
        existing = clazz.observed_field(new_field.property_name)
        if existing is not None and existing.type != new_field.type:
            conflicting = not is_fallback_type(existing.type) and not is_fallback_type(new_field.type)
            if conflicting and self.strict:
                raise FieldTypeConflictError(clazz.name, new_field.property_name, existing.type, new_field.type)
            if self.strict and is_fallback_type(new_field.type) and not is_fallback_type(existing.type):
                # strict mode never trades a concrete type for an untyped fallback
                logger.debug("Keeping %s.%s as %s over %s",
                             clazz.name, new_field.property_name, existing.type, new_field.type)
                return
            log = logger.warning if conflicting else logger.debug
            log("Field %s.%s changes type from %s to %s",
                clazz.name, new_field.property_name, existing.type, new_field.type)
        clazz.put_field(new_field)

    def _finalize(self) -> None:
        total = len(self.registry)
        for completed, clazz in enumerate(self.registry, start=1):
            clazz.finalize()
            if self.progress:
                self.progress(completed / total)


def build_schema(root_class_name: str, root_node: JsonNode,
                 progress: Optional[ProgressCallback] = None, strict: bool = False) -> ClassRegistry:
    """Infers the class registry for a parsed JSON document.

    Args:
        root_class_name: Name of the class created for the root object
        root_node: The parsed JSON document; must be an object
        progress: Optional sink for the fraction of classes finalized
        strict: Raise on conflicting field types within a merged class

    Returns:
        The finished class registry.
    """
    return SchemaBuilder(progress=progress, strict=strict).build(root_class_name, root_node)


def _kind_of(node: JsonNode) -> str:
    if isinstance(node, list):
        return "an array"
    if node is None:
        return "null"
    if isinstance(node, bool):
        return "a boolean"
    if isinstance(node, (int, float)):
        return "a number"
    if isinstance(node, str):
        return "a string"
    return type(node).__name__
