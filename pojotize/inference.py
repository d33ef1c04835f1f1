"""Infers class hierarchies from sample JSON documents.

This module provides the core of pojotize:
- TypeInferrer: infers the type of a single JSON value
- ClassSynthesizer: turns a JSON object into a tree of ClassSpec objects
- synthesize: convenience wrapper around a fresh ClassSynthesizer

Nested objects become nested classes named after their parent class and the
field that holds them: ``{"address": {...}}`` inside ``Person`` produces
``PersonAddress``, declared inside ``Person``.
"""

from typing import Any, Dict, List

from pojotize.classspec import ClassRef, ClassSpec, FieldSpec, ListOf, Primitive, TypeDescriptor
from pojotize.common import capitalize_first, is_identifier, sanitize_identifier
from pojotize.errors import EmptyArrayError, MaxDepthExceededError, NameCollisionError, NotAnObjectError

JsonNode = Dict[str, 'JsonNode'] | List['JsonNode'] | str | bool | int | float | None

DEFAULT_MAX_DEPTH = 64

INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
INT64_MIN, INT64_MAX = -2**63, 2**63 - 1

EMPTY_ARRAY_POLICIES = ('error', 'string')
NESTED_NAMING_RULES = ('field', 'first-key')


def json_kind(value: Any) -> str:
    """Returns the JSON data model name of a parsed JSON value."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return type(value).__name__


def integral_kind(value: int) -> str:
    """Picks the narrowest integral kind that holds the value without loss."""
    if INT32_MIN <= value <= INT32_MAX:
        return 'int'
    if INT64_MIN <= value <= INT64_MAX:
        return 'long'
    return 'biginteger'


def child_path(path: str, key: str) -> str:
    if key and is_identifier(key):
        return f"{path}.{key}"
    return f"{path}[{key!r}]"


class ClassBuilder:
    """Collects the fields and nested classes of one class while it is being synthesized."""

    def __init__(self, name: str, path: str):
        self.name = name
        self.path = path
        self.fields: List[FieldSpec] = []
        self.nested_classes: List[ClassSpec] = []

    def has_field(self, field_name: str) -> bool:
        return any(f.name == field_name for f in self.fields)

    def add_field(self, field: FieldSpec) -> None:
        self.fields.append(field)

    def add_nested_class(self, spec: ClassSpec) -> None:
        self.nested_classes.append(spec)

    def build(self) -> ClassSpec:
        return ClassSpec(self.name, tuple(self.fields), tuple(self.nested_classes))


class TypeInferrer:
    """Infers the type descriptor of a JSON value.

    Objects are handed back to the synthesizer, which builds a nested class and
    registers it with the enclosing class.
    """

    def __init__(self, synthesizer: 'ClassSynthesizer'):
        self.synthesizer = synthesizer

    def infer(self, value: JsonNode, field_name_hint: str, enclosing: ClassBuilder,
              path: str = '$', depth: int = 0) -> TypeDescriptor:
        """Infers the type of a field value.

        Args:
            value: The field value
            field_name_hint: The JSON key of the field, used to name nested classes
            enclosing: The class the field belongs to
            path: JSON path of the value, used in error messages
            depth: Nesting depth of the container holding the value

        Returns:
            The inferred type descriptor
        """
        if isinstance(value, str):
            return Primitive('string')
        if isinstance(value, bool):
            return Primitive('boolean')
        if isinstance(value, int):
            return Primitive(integral_kind(value))
        if isinstance(value, float):
            return Primitive('double')
        if isinstance(value, list):
            self.synthesizer.check_depth(depth + 1, path)
            if not value:
                if self.synthesizer.empty_arrays == 'string':
                    return ListOf(Primitive('string'))
                raise EmptyArrayError(path)
            # only the first element decides the element type
            return ListOf(self.infer(value[0], field_name_hint, enclosing, f"{path}[0]", depth + 1))
        if isinstance(value, dict):
            return self.synthesizer.synthesize_nested(value, field_name_hint, enclosing, path, depth + 1)
        if value is None:
            return Primitive('string')
        raise TypeError(f"Unsupported JSON value of type {type(value).__name__} at {path}")


class ClassSynthesizer:
    """Synthesizes a tree of class specs from a JSON object."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, empty_arrays: str = 'error',
                 nested_naming: str = 'field'):
        """Initialize the synthesizer.

        Args:
            max_depth: Maximum nesting depth of objects and arrays below the root object
            empty_arrays: 'error' to reject empty arrays, 'string' to type them as lists of strings
            nested_naming: 'field' names nested classes after the field holding them,
                'first-key' after the first key inside the nested object
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")
        if empty_arrays not in EMPTY_ARRAY_POLICIES:
            raise ValueError(f"Unknown empty array policy: {empty_arrays}")
        if nested_naming not in NESTED_NAMING_RULES:
            raise ValueError(f"Unknown nested naming rule: {nested_naming}")
        self.max_depth = max_depth
        self.empty_arrays = empty_arrays
        self.nested_naming = nested_naming
        self.inferrer = TypeInferrer(self)
        self.issued_names: Dict[str, str] = {}

    def synthesize(self, value: JsonNode, class_name: str) -> ClassSpec:
        """Synthesizes the class tree for a JSON object.

        Args:
            value: Parsed JSON object
            class_name: Name of the root class

        Returns:
            The root class spec, with all nested classes attached

        Raises:
            NotAnObjectError: The value is not a JSON object
            EmptyArrayError: An array has no element to infer from
            NameCollisionError: Two classes or two fields would share a name
            MaxDepthExceededError: The value is nested deeper than max_depth
        """
        if not is_identifier(class_name):
            raise ValueError(f"Invalid class name: {class_name!r}")
        if not isinstance(value, dict):
            raise NotAnObjectError(json_kind(value), '$')
        self.issued_names = {}
        self.reserve_name(class_name, '$')
        try:
            return self.synthesize_class(value, class_name, '$', 0)
        except RecursionError as e:
            # the interpreter stack ran out before max_depth was reached
            raise MaxDepthExceededError(self.max_depth, '$') from e

    def synthesize_class(self, value: Dict[str, JsonNode], class_name: str, path: str, depth: int) -> ClassSpec:
        builder = ClassBuilder(class_name, path)
        for key, field_value in value.items():
            field_path = child_path(path, key)
            field_name = sanitize_identifier(key)
            if builder.has_field(field_name):
                raise NameCollisionError(f"{class_name}.{field_name}", field_path)
            descriptor = self.inferrer.infer(field_value, key, builder, field_path, depth)
            builder.add_field(FieldSpec(field_name, descriptor, key))
        return builder.build()

    def synthesize_nested(self, value: Dict[str, JsonNode], field_name_hint: str, enclosing: ClassBuilder,
                          path: str, depth: int) -> ClassRef:
        """Builds the nested class for an object-valued field and registers it with the enclosing class."""
        self.check_depth(depth, path)
        nested_name = self.nested_class_name(enclosing.name, field_name_hint, value)
        self.reserve_name(nested_name, path)
        enclosing.add_nested_class(self.synthesize_class(value, nested_name, path, depth))
        return ClassRef(nested_name)

    def nested_class_name(self, parent_class_name: str, field_name: str, value: Dict[str, JsonNode]) -> str:
        segment = field_name
        if self.nested_naming == 'first-key' and value:
            segment = next(iter(value))
        return parent_class_name + capitalize_first(sanitize_identifier(segment))

    def reserve_name(self, class_name: str, path: str) -> None:
        # class files of nested classes must not clash on case-insensitive file systems
        key = class_name.casefold()
        if key in self.issued_names:
            raise NameCollisionError(class_name, path)
        self.issued_names[key] = class_name

    def check_depth(self, depth: int, path: str) -> None:
        if depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path)


def synthesize(value: JsonNode, class_name: str, max_depth: int = DEFAULT_MAX_DEPTH,
               empty_arrays: str = 'error', nested_naming: str = 'field') -> ClassSpec:
    """Synthesizes the class tree for a JSON object.

    Args:
        value: Parsed JSON object
        class_name: Name of the root class
        max_depth: Maximum nesting depth below the root object
        empty_arrays: Empty array policy, 'error' or 'string'
        nested_naming: Nested class naming rule, 'field' or 'first-key'

    Returns:
        The root class spec
    """
    synthesizer = ClassSynthesizer(max_depth=max_depth, empty_arrays=empty_arrays, nested_naming=nested_naming)
    return synthesizer.synthesize(value, class_name)
