from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from tsderive.errors import UnmappedTypeError


class TypeKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"
    WRAPPER = "wrapper"
    UNIT = "unit"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class GenericType:
    name: str
    argument: Optional["GenericType"] = None


LIST = "List"
OPTIONAL = "Optional"
UNIT = "Unit"
WRAPPER = "Wrapper"

_KIND_BY_NAME: Dict[str, TypeKind] = {
    "str": TypeKind.STRING,
    "String": TypeKind.STRING,
    "int": TypeKind.NUMBER,
    "float": TypeKind.NUMBER,
    "i8": TypeKind.NUMBER,
    "i16": TypeKind.NUMBER,
    "i32": TypeKind.NUMBER,
    "i64": TypeKind.NUMBER,
    "u8": TypeKind.NUMBER,
    "u16": TypeKind.NUMBER,
    "u32": TypeKind.NUMBER,
    "u64": TypeKind.NUMBER,
    "f32": TypeKind.NUMBER,
    "f64": TypeKind.NUMBER,
    "bool": TypeKind.BOOLEAN,
    LIST: TypeKind.LIST,
    "list": TypeKind.LIST,
    "Sequence": TypeKind.LIST,
    "Vec": TypeKind.LIST,
    "Slice": TypeKind.LIST,
    WRAPPER: TypeKind.WRAPPER,
    "Box": TypeKind.WRAPPER,
    "Final": TypeKind.WRAPPER,
    "Annotated": TypeKind.WRAPPER,
    "Required": TypeKind.WRAPPER,
    "NotRequired": TypeKind.WRAPPER,
    "ReadOnly": TypeKind.WRAPPER,
    UNIT: TypeKind.UNIT,
    "None": TypeKind.UNIT,
    "NoneType": TypeKind.UNIT,
    OPTIONAL: TypeKind.OPTIONAL,
    "Option": TypeKind.OPTIONAL,
}

_LEAF_RENDERING = {
    TypeKind.STRING: "string",
    TypeKind.NUMBER: "number",
    TypeKind.BOOLEAN: "boolean",
    TypeKind.UNIT: "null",
}


def kind_of(name: str) -> Optional[TypeKind]:
    return _KIND_BY_NAME.get(name)


def to_ts_type(gt: GenericType, *, field: Optional[str] = None) -> str:
    """Render a normalized type tree as TypeScript type syntax.

    Raises:
        UnmappedTypeError: If a name in the tree has no rendering, or a
            constructor is missing its type argument.
    """
    kind = kind_of(gt.name)
    if kind is None:
        raise UnmappedTypeError(gt.name, field=field)

    if kind in _LEAF_RENDERING:
        return _LEAF_RENDERING[kind]

    if gt.argument is None:
        raise UnmappedTypeError(
            gt.name, field=field, reason="Missing type argument for"
        )
    inner = to_ts_type(gt.argument, field=field)

    if kind == TypeKind.LIST:
        # `string | null[]` would bind the brackets to `null` only.
        if _renders_as_union(gt.argument):
            inner = f"({inner})"
        return f"{inner}[]"
    if kind == TypeKind.WRAPPER:
        return inner
    if kind == TypeKind.OPTIONAL:
        return f"{inner} | null"
    raise AssertionError(f"Unhandled type kind: {kind}")


def _renders_as_union(gt: GenericType) -> bool:
    kind = kind_of(gt.name)
    while kind == TypeKind.WRAPPER and gt.argument is not None:
        gt = gt.argument
        kind = kind_of(gt.name)
    return kind == TypeKind.OPTIONAL
