import ast
import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional


_CURRENT_SOURCE: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "tsderive_current_source", default=None
)
_CURRENT_NODE: contextvars.ContextVar[Optional[ast.AST]] = contextvars.ContextVar(
    "tsderive_current_node", default=None
)


def _line_from_source(source: str, line_no: int) -> Optional[str]:
    if line_no <= 0:
        return None
    lines = source.splitlines()
    if line_no > len(lines):
        return None
    return lines[line_no - 1].strip()


def _format_with_context(
    message: str,
    *,
    source: Optional[str] = None,
    node: Optional[ast.AST] = None,
) -> str:
    source = source if source is not None else _CURRENT_SOURCE.get()
    node = node if node is not None else _CURRENT_NODE.get()
    if node is None:
        return message

    line = getattr(node, "lineno", None)
    col = getattr(node, "col_offset", None)
    if line is None:
        return message

    code: Optional[str] = None
    if source is not None:
        code = ast.get_source_segment(source, node) or _line_from_source(source, line)
        if code is not None:
            code = code.strip()

    details = [f"Location: line {line}, column {(col + 1) if col is not None else 1}"]
    if code:
        details.append(f"Code: {code}")
    return f"{message}\n" + "\n".join(details)


def format_diagnostic(message: str, *, node: Optional[ast.AST] = None) -> str:
    """Attach best-effort source context to a warning diagnostic string."""
    return _format_with_context(message, node=node)


@contextmanager
def derive_source_context(source: str) -> Iterator[None]:
    token = _CURRENT_SOURCE.set(source)
    try:
        yield
    finally:
        _CURRENT_SOURCE.reset(token)


@contextmanager
def derive_node_context(node: Optional[ast.AST]) -> Iterator[None]:
    token = _CURRENT_NODE.set(node)
    try:
        yield
    finally:
        _CURRENT_NODE.reset(token)


class DeriveError(Exception):
    """Base error for interface generation."""

    def __init__(self, message: str, *, node: Optional[ast.AST] = None):
        self.message = message
        super().__init__(_format_with_context(message, node=node))


class UnsupportedTypeError(DeriveError):
    """Raised when an annotation uses a construct the normalizer cannot read."""

    def __init__(
        self,
        field: Optional[str],
        expression: str,
        *,
        reason: str = "Unsupported type expression",
        node: Optional[ast.AST] = None,
    ):
        self.field = field
        self.expression = expression
        where = f" on field '{field}'" if field is not None else ""
        super().__init__(f"{reason}{where}: {expression}", node=node)


class UnmappedTypeError(DeriveError):
    """Raised when a normalized type name has no TypeScript rendering."""

    def __init__(
        self,
        name: str,
        *,
        field: Optional[str] = None,
        reason: str = "Unmapped type",
        node: Optional[ast.AST] = None,
    ):
        self.name = name
        self.field = field
        where = f" on field '{field}'" if field is not None else ""
        super().__init__(f"{reason}{where}: {name}", node=node)


class NotARecordError(DeriveError):
    """Raised when a selected definition is not a record class."""

    def __init__(self, name: str, *, node: Optional[ast.AST] = None):
        self.name = name
        super().__init__(
            f"Expected a record class for @typescript_interface, got '{name}'.",
            node=node,
        )


class TruncatedTypeWarning(UserWarning):
    """Issued when extra generic or tuple arguments are dropped."""
