"""Class hierarchy model produced by inference and consumed by the code generators.

A synthesis result is a tree of ``ClassSpec`` objects. Each class owns the
classes synthesized for its object-valued fields; fields refer to them by name
through ``ClassRef``. All nodes are frozen, so a tree never changes after it
has been built.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Union

PRIMITIVE_KINDS = ('string', 'int', 'long', 'biginteger', 'boolean', 'double')
INTEGRAL_KINDS = ('int', 'long', 'biginteger')


@dataclass(frozen=True)
class Primitive:
    """A terminal type such as ``string`` or ``int``."""
    kind: str

    def __post_init__(self):
        if self.kind not in PRIMITIVE_KINDS:
            raise ValueError(f"Unknown primitive kind: {self.kind}")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind}

    def __str__(self) -> str:
        return self.kind


@dataclass(frozen=True)
class ListOf:
    """A list of values that all share the element type."""
    element: 'TypeDescriptor'

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "list", "items": self.element.to_dict()}

    def __str__(self) -> str:
        return f"list<{self.element}>"


@dataclass(frozen=True)
class ClassRef:
    """A reference, by name, to a class in the same synthesis result."""
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "class", "name": self.name}

    def __str__(self) -> str:
        return self.name


TypeDescriptor = Union[Primitive, ListOf, ClassRef]


@dataclass(frozen=True)
class FieldSpec:
    """
    One field of a synthesized class.

    Attributes:
        name: Identifier-safe field name
        type: Inferred type of the field
        json_name: The key of the field in the JSON document
    """
    name: str
    type: TypeDescriptor
    json_name: Optional[str] = None

    def __post_init__(self):
        if self.json_name is None:
            object.__setattr__(self, 'json_name', self.name)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.json_name != self.name:
            result["jsonName"] = self.json_name
        result["type"] = self.type.to_dict()
        return result


@dataclass(frozen=True)
class ClassSpec:
    """A synthesized class: its name, ordered fields and the nested classes it declares."""
    name: str
    fields: Tuple[FieldSpec, ...] = ()
    nested_classes: Tuple['ClassSpec', ...] = ()

    def walk(self) -> Iterator['ClassSpec']:
        """Yields this class and all nested classes, depth first, in declaration order."""
        yield self
        for nested in self.nested_classes:
            yield from nested.walk()

    def find(self, name: str) -> Optional['ClassSpec']:
        """Finds a class by name anywhere in this tree."""
        return next((c for c in self.walk() if c.name == name), None)

    def field(self, name: str) -> Optional[FieldSpec]:
        """Looks up a field by identifier or by JSON name."""
        return next((f for f in self.fields if f.name == name or f.json_name == name), None)

    def depth(self) -> int:
        """Number of class levels in this tree; a class without nested classes has depth 1."""
        if not self.nested_classes:
            return 1
        return 1 + max(nested.depth() for nested in self.nested_classes)

    def class_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.walk())

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.nested_classes:
            result["nestedClasses"] = [c.to_dict() for c in self.nested_classes]
        return result


def type_descriptor_from_dict(node: Dict[str, Any]) -> TypeDescriptor:
    """Rebuilds a type descriptor from its ``to_dict`` form."""
    kind = node.get("type")
    if kind == "list":
        return ListOf(type_descriptor_from_dict(node["items"]))
    if kind == "class":
        return ClassRef(node["name"])
    if kind in PRIMITIVE_KINDS:
        return Primitive(kind)
    raise ValueError(f"Unknown type descriptor: {node}")


def class_spec_from_dict(node: Dict[str, Any]) -> ClassSpec:
    """Rebuilds a class tree from its ``to_dict`` form."""
    fields = tuple(
        FieldSpec(f["name"], type_descriptor_from_dict(f["type"]), f.get("jsonName", f["name"]))
        for f in node.get("fields", []))
    nested = tuple(class_spec_from_dict(c) for c in node.get("nestedClasses", []))
    return ClassSpec(node["name"], fields, nested)
