"""Normalization of field annotations into :class:`GenericType` trees.

Annotations are read as ``ast`` nodes and never evaluated, so forward
references and names that are not importable in the current interpreter
are handled the same way as builtins.
"""

import ast
import warnings
from typing import List, Optional

from tsderive.errors import (
    TruncatedTypeWarning,
    UnsupportedTypeError,
    derive_node_context,
    format_diagnostic,
)
from tsderive.typesys import LIST, OPTIONAL, UNIT, GenericType


_TUPLE_NAMES = {"Tuple", "tuple"}
_FUNCTION_NAMES = {"Callable"}
# Trailing arguments are metadata, not type parameters.
_METADATA_NAMES = {"Annotated"}


def normalize_type(
    node: ast.AST,
    *,
    field: Optional[str] = None,
    strict_generics: bool = False,
) -> GenericType:
    """Normalize one annotation node.

    Args:
        node: Annotation expression node.
        field: Name of the field being normalized, used in diagnostics.
        strict_generics: Reject extra generic/tuple arguments instead of
            dropping them with a :class:`TruncatedTypeWarning`.

    Raises:
        UnsupportedTypeError: If the annotation uses a construct with no
            normalized form.
    """
    return _TypeNormalizer(field, strict_generics).visit(node)


def parse_annotation(text: str, *, field: Optional[str] = None) -> ast.expr:
    """Parse annotation text such as ``"List[int]"`` into an expression node."""
    try:
        return ast.parse(text.strip(), mode="eval").body
    except SyntaxError as exc:
        raise UnsupportedTypeError(
            field, text, reason="Unparseable type expression"
        ) from exc


class _TypeNormalizer:
    def __init__(self, field: Optional[str], strict_generics: bool):
        self.field = field
        self.strict_generics = strict_generics

    def visit(self, node: ast.AST) -> GenericType:
        with derive_node_context(node):
            if isinstance(node, ast.Constant):
                return self._visit_constant(node)
            if isinstance(node, (ast.Name, ast.Attribute)):
                name = self._path_name(node)
                if name in _FUNCTION_NAMES:
                    self._unsupported(node, "Function types are not supported")
                return GenericType(name)
            if isinstance(node, ast.Subscript):
                return self._visit_subscript(node)
            if isinstance(node, ast.List):
                if len(node.elts) != 1:
                    self._unsupported(node, "List literal types take exactly one element")
                return GenericType(LIST, self.visit(node.elts[0]))
            if isinstance(node, ast.Tuple):
                return self._visit_tuple(node, node.elts)
            if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
                return self._visit_union(node)
            self._unsupported(node)

    def _visit_constant(self, node: ast.Constant) -> GenericType:
        if node.value is None:
            return GenericType(UNIT)
        if isinstance(node.value, str):
            parsed = parse_annotation(node.value, field=self.field)
            # Positions inside the string are relative to the string itself.
            for child in ast.walk(parsed):
                ast.copy_location(child, node)
            return self.visit(parsed)
        self._unsupported(node)

    def _visit_subscript(self, node: ast.Subscript) -> GenericType:
        if not isinstance(node.value, (ast.Name, ast.Attribute)):
            self._unsupported(node)
        name = self._path_name(node.value)
        if name in _FUNCTION_NAMES:
            self._unsupported(node, "Function types are not supported")

        args: List[ast.expr]
        if isinstance(node.slice, ast.Tuple):
            args = list(node.slice.elts)
        else:
            args = [node.slice]

        if name in _TUPLE_NAMES:
            return self._visit_tuple(node, args)
        if not args:
            self._unsupported(node)
        if name not in _METADATA_NAMES:
            self._check_truncation(
                node, args, f"'{name}' uses only its first type argument"
            )
        return GenericType(name, self.visit(args[0]))

    def _visit_tuple(self, node: ast.AST, elts: List[ast.expr]) -> GenericType:
        if not elts:
            return GenericType(UNIT)
        self._check_truncation(node, elts, "Tuple types use only their first element")
        return self.visit(elts[0])

    def _visit_union(self, node: ast.BinOp) -> GenericType:
        if _is_none(node.right):
            return GenericType(OPTIONAL, self.visit(node.left))
        if _is_none(node.left):
            return GenericType(OPTIONAL, self.visit(node.right))
        self._unsupported(node, "Only 'T | None' unions are supported")

    def _check_truncation(self, node: ast.AST, args: List[ast.expr], message: str) -> None:
        if len(args) <= 1:
            return
        if self.strict_generics:
            self._unsupported(node, message)
        field = f" on field '{self.field}'" if self.field is not None else ""
        warnings.warn(
            format_diagnostic(f"{message}{field}: {ast.unparse(node)}", node=node),
            TruncatedTypeWarning,
            stacklevel=2,
        )

    def _path_name(self, node: ast.AST) -> str:
        if isinstance(node, ast.Name):
            return node.id
        if isinstance(node, ast.Attribute):
            return node.attr
        self._unsupported(node)

    def _unsupported(self, node: ast.AST, reason: str = "Unsupported type expression"):
        raise UnsupportedTypeError(self.field, ast.unparse(node), reason=reason, node=node)


def _is_none(node: ast.AST) -> bool:
    return isinstance(node, ast.Constant) and node.value is None
