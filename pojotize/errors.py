"""Exceptions raised by pojotize."""

from typing import Optional


class PojotizeError(Exception):
    """
    Base class for pojotize errors.

    Attributes:
        message: Human-readable error description
        context: Optional context about where the error occurred
        cause: Optional underlying exception that caused this error
    """

    def __init__(self, message: str, context: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        self.message = message
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class InvalidInputError(PojotizeError):
    """Raised when the document root is not a JSON object or the root class name is empty."""


class MalformedDocumentError(PojotizeError):
    """Raised when the JSON text cannot be parsed."""


class FieldTypeConflictError(PojotizeError):
    """
    Raised in strict mode when one property of a merged class is observed
    with two different concrete types.

    Attributes:
        class_name: The class holding the conflicting field
        property_name: The JSON property name
        existing_type: The type recorded by the earlier visit
        new_type: The type resolved by the later visit
    """

    def __init__(self, class_name: str, property_name: str, existing_type, new_type) -> None:
        self.class_name = class_name
        self.property_name = property_name
        self.existing_type = existing_type
        self.new_type = new_type
        super().__init__(
            f"Conflicting types for property '{property_name}': {existing_type} vs {new_type}",
            context=class_name)
