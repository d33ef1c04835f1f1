"""Errors raised while inferring class hierarchies from JSON samples."""

from typing import Optional


class SchemaInferenceError(Exception):
    """
    Exception raised when a class hierarchy cannot be inferred from a JSON value.

    Attributes:
        message: Human-readable error description
        context: Optional JSON path of the value that caused the error
    """

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        self.message = message
        self.context = context
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class EmptyArrayError(SchemaInferenceError):
    """An array has no elements, so its element type cannot be inferred."""

    def __init__(self, context: Optional[str] = None) -> None:
        super().__init__("Cannot infer the element type of an empty array", context)


class NotAnObjectError(SchemaInferenceError):
    """Synthesis was invoked on a JSON value that is not an object."""

    def __init__(self, kind: str, context: Optional[str] = None) -> None:
        self.kind = kind
        super().__init__(f"Expected a JSON object, got {kind}", context)


class NameCollisionError(SchemaInferenceError):
    """
    Two synthesized classes (or two fields of one class) would receive the same name.

    Attributes:
        name: The colliding name
    """

    def __init__(self, name: str, context: Optional[str] = None) -> None:
        self.name = name
        super().__init__(f"Name collision: '{name}' is already in use", context)


class MaxDepthExceededError(SchemaInferenceError):
    """The JSON value is nested deeper than the configured limit."""

    def __init__(self, max_depth: int, context: Optional[str] = None) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth ({max_depth}) exceeded", context)
