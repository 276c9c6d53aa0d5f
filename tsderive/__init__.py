"""Public Python API for tsderive.

The package exposes a small stable surface for turning Python record classes
into TypeScript interface declarations. The selection marker lives in
``tsderive.markers``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from tsderive.compiler import InterfaceCompiler
from tsderive.declarations import DeclarationSet
from tsderive.errors import (
    DeriveError,
    NotARecordError,
    TruncatedTypeWarning,
    UnmappedTypeError,
    UnsupportedTypeError,
)
from tsderive.exporter import (
    compile_declarations,
    compile_records,
    export_declarations,
    generate_declaration,
)
from tsderive.ir import DeriveConfig, FieldDescriptor, RecordDescriptor
from tsderive.markers import typescript_interface
from tsderive.mcp_bridge import build_fastmcp_server
from tsderive.normalizer import normalize_type, parse_annotation
from tsderive.ts_generator import TSGenerator
from tsderive.typesys import GenericType, TypeKind, to_ts_type

try:
    __version__: str = version("tsderive")
except PackageNotFoundError:  # pragma: no cover - editable local fallback
    __version__ = "0.1.0"


__all__ = [
    "__version__",
    "DeclarationSet",
    "DeriveConfig",
    "DeriveError",
    "FieldDescriptor",
    "GenericType",
    "InterfaceCompiler",
    "NotARecordError",
    "RecordDescriptor",
    "TSGenerator",
    "TruncatedTypeWarning",
    "TypeKind",
    "UnmappedTypeError",
    "UnsupportedTypeError",
    "build_fastmcp_server",
    "compile_declarations",
    "compile_records",
    "export_declarations",
    "generate_declaration",
    "normalize_type",
    "parse_annotation",
    "to_ts_type",
    "typescript_interface",
]
