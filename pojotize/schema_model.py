"""Type model produced by schema inference.

The model has three layers:
- FieldType descriptors: primitives, ListOf(T) and ClassRef(name)
- FieldModel / ClassModel: one inferred record type and its fields
- ClassRegistry: the insertion-ordered set of classes for one document
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pojotize.common import field_sort_key


@dataclass(frozen=True)
class FieldType(ABC):
    """Base class for field type descriptors."""

    @abstractmethod
    def to_json(self) -> Any:
        """JSON-compatible form of the type, as written by the model export."""


@dataclass(frozen=True)
class PrimitiveType(FieldType):
    """A leaf type such as Boolean or String."""
    name: str

    def __str__(self) -> str:
        return self.name

    def to_json(self) -> Any:
        return self.name


@dataclass(frozen=True)
class ListOf(FieldType):
    """A list whose element type was sampled from the first array element."""
    item_type: FieldType

    def __str__(self) -> str:
        return f"ListOf({self.item_type})"

    def to_json(self) -> Any:
        return {"type": "list", "items": self.item_type.to_json()}


@dataclass(frozen=True)
class ClassRef(FieldType):
    """A non-owning reference to a class in the registry, by name."""
    name: str

    def __str__(self) -> str:
        return f"ClassRef({self.name})"

    def to_json(self) -> Any:
        return {"type": "ref", "name": self.name}


BOOLEAN = PrimitiveType("Boolean")
INTEGER64 = PrimitiveType("Integer64")
FLOAT64 = PrimitiveType("Float64")
STRING = PrimitiveType("String")
OBJECT = PrimitiveType("Object")
UNTYPED = PrimitiveType("Untyped")


def is_fallback_type(field_type: FieldType) -> bool:
    """True for the untyped fallbacks produced from null values and empty or ambiguous arrays."""
    if isinstance(field_type, ListOf):
        return field_type.item_type in (OBJECT, UNTYPED)
    return field_type in (OBJECT, UNTYPED)


@dataclass
class FieldModel:
    """A single field of an inferred class."""
    property_name: str
    type: FieldType

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.property_name, "type": self.type.to_json()}


@dataclass
class ClassModel:
    """
    An inferred record type.

    Fields are collected into a name-keyed map while the document is walked
    and only become the ordered `fields` list once `finalize` runs.
    """
    name: str
    fields: List[FieldModel] = field(default_factory=list)
    _observed: Dict[str, FieldModel] = field(default_factory=dict, repr=False, compare=False)

    def put_field(self, new_field: FieldModel) -> Optional[FieldModel]:
        """Stores a field, replacing any earlier one with the same property name.

        Returns:
            The replaced field, or None if the property name is new to this class.
        """
        previous = self._observed.get(new_field.property_name)
        self._observed[new_field.property_name] = new_field
        return previous

    def observed_field(self, property_name: str) -> Optional[FieldModel]:
        return self._observed.get(property_name)

    def finalize(self) -> None:
        """Materializes the field list in property name order."""
        self.fields = sorted(self._observed.values(), key=field_sort_key)

    def get_field(self, property_name: str) -> Optional[FieldModel]:
        """Looks up a finalized field by property name."""
        return next((f for f in self.fields if f.property_name == property_name), None)

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "fields": [f.to_json() for f in self.fields]}


class ClassRegistry:
    """Insertion-ordered mapping of class name to ClassModel."""

    def __init__(self) -> None:
        self._classes: Dict[str, ClassModel] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[ClassModel]:
        return iter(list(self._classes.values()))

    def __len__(self) -> int:
        return len(self._classes)

    def __getitem__(self, name: str) -> ClassModel:
        return self._classes[name]

    def get(self, name: str) -> Optional[ClassModel]:
        return self._classes.get(name)

    def get_or_create(self, name: str) -> Tuple[ClassModel, bool]:
        """Returns the class registered under `name`, creating it if needed.

        Returns:
            Tuple of (class, created).
        """
        existing = self._classes.get(name)
        if existing is not None:
            return existing, False
        created = ClassModel(name)
        self._classes[name] = created
        return created, True

    @property
    def names(self) -> List[str]:
        return list(self._classes.keys())

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the registry to a JSON-compatible dictionary."""
        return {"classes": [c.to_json() for c in self._classes.values()]}
