import ast
from dataclasses import dataclass, field
from typing import Optional, Tuple

from tsderive.typesys import GenericType


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: GenericType
    expression: str = ""
    node: Optional[ast.AST] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class RecordDescriptor:
    name: str
    fields: Tuple[FieldDescriptor, ...] = ()

    def __post_init__(self):
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class DeriveConfig:
    """Options shared by the compiler, exporter, CLI and MCP bridge."""

    include_all: bool = False
    exported: bool = False
    strict_generics: bool = False
