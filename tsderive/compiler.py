import ast
from typing import List, Optional

from tsderive.errors import (
    DeriveError,
    NotARecordError,
    derive_node_context,
    derive_source_context,
)
from tsderive.ir import FieldDescriptor, RecordDescriptor
from tsderive.normalizer import normalize_type

MARKER_NAME = "typescript_interface"

_ENUM_BASES = {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"}
_CLASS_VAR_NAMES = {"ClassVar"}


class InterfaceCompiler:
    def __init__(self, *, strict_generics: bool = False):
        """Create a compiler reading record classes from Python source."""
        self.strict_generics = strict_generics

    def compile(self, source: str, *, include_all: bool = False) -> List[RecordDescriptor]:
        """Compile every selected record class in ``source``.

        Classes are selected by the ``@typescript_interface`` marker. With
        ``include_all`` every top-level non-enum class declaring annotated
        fields is selected as well.
        """
        if not source.strip():
            raise DeriveError("Source is empty; nothing to generate.")

        with derive_source_context(source):
            try:
                module = ast.parse(source)
            except SyntaxError as exc:
                raise DeriveError(_format_syntax_error(exc, source)) from exc

            records: List[RecordDescriptor] = []
            for node in module.body:
                if _has_marker(node):
                    records.append(self.compile_record(node))
                    continue
                if include_all and _is_implicit_record(node):
                    records.append(self.compile_record(node))
            return records

    def compile_record(self, node: ast.AST) -> RecordDescriptor:
        with derive_node_context(node):
            name = getattr(node, "name", type(node).__name__)
            if not isinstance(node, ast.ClassDef) or _is_enum(node):
                raise NotARecordError(name, node=node)

            fields: List[FieldDescriptor] = []
            for stmt in node.body:
                if not isinstance(stmt, ast.AnnAssign):
                    continue
                if not isinstance(stmt.target, ast.Name):
                    continue
                if _is_class_var(stmt.annotation):
                    continue
                with derive_node_context(stmt):
                    fields.append(self._compile_field(stmt.target.id, stmt.annotation))
            return RecordDescriptor(node.name, tuple(fields))

    def _compile_field(self, name: str, annotation: ast.expr) -> FieldDescriptor:
        return FieldDescriptor(
            name=name,
            type=normalize_type(
                annotation,
                field=name,
                strict_generics=self.strict_generics,
            ),
            expression=ast.unparse(annotation),
            node=annotation,
        )


def _has_marker(node: ast.AST) -> bool:
    decorators = getattr(node, "decorator_list", None) or []
    for decorator in decorators:
        if isinstance(decorator, ast.Call):
            decorator = decorator.func
        if isinstance(decorator, ast.Name) and decorator.id == MARKER_NAME:
            return True
        if isinstance(decorator, ast.Attribute) and decorator.attr == MARKER_NAME:
            return True
    return False


def _is_implicit_record(node: ast.AST) -> bool:
    if not isinstance(node, ast.ClassDef) or _is_enum(node):
        return False
    return any(
        isinstance(stmt, ast.AnnAssign)
        and isinstance(stmt.target, ast.Name)
        and not _is_class_var(stmt.annotation)
        for stmt in node.body
    )


def _is_enum(node: ast.ClassDef) -> bool:
    return any(_base_name(base) in _ENUM_BASES for base in node.bases)


def _is_class_var(annotation: ast.expr) -> bool:
    if isinstance(annotation, ast.Subscript):
        annotation = annotation.value
    return _base_name(annotation) in _CLASS_VAR_NAMES


def _base_name(node: ast.AST) -> Optional[str]:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _format_syntax_error(exc: SyntaxError, source: str) -> str:
    line = exc.lineno or 0
    col = exc.offset or 0
    snippet = (exc.text or "").strip()
    if not snippet and line > 0:
        lines = source.splitlines()
        if line <= len(lines):
            snippet = lines[line - 1].strip()
    message = f"Invalid Python syntax: {exc.msg}"
    if line > 0:
        message += f"\nLocation: line {line}, column {col if col > 0 else 1}"
    if snippet:
        message += f"\nCode: {snippet}"
    return message
