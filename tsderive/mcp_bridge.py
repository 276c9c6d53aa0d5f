"""FastMCP bridge exposing interface generation as MCP tools."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Type

from tsderive.exporter import compile_declarations
from tsderive.ir import DeriveConfig
from tsderive.normalizer import normalize_type, parse_annotation
from tsderive.typesys import to_ts_type


def build_fastmcp_server(
    *,
    server_name: str = "tsderive",
    config: Optional[DeriveConfig] = None,
    mcp_cls: Optional[Type[Any]] = None,
) -> Any:
    """Create a FastMCP server with the generation tools registered.

    Parameters
    ----------
    server_name:
        Name passed to FastMCP constructor.
    config:
        Generation options applied to every tool call.
    mcp_cls:
        Optional FastMCP-compatible class override (useful for tests).

    Returns:
        Configured MCP server instance.

    Raises:
        RuntimeError: If ``fastmcp`` is unavailable or registration API is unsupported.

    Example:
        >>> mcp = build_fastmcp_server()
        >>> mcp.run()  # doctest: +SKIP
    """

    if mcp_cls is None:
        try:
            from fastmcp import FastMCP  # type: ignore
        except ImportError as exc:  # pragma: no cover - depends on installed extras
            raise RuntimeError(
                "fastmcp is not installed. Install it or pass mcp_cls explicitly."
            ) from exc
        mcp_cls = FastMCP

    config = config or DeriveConfig()
    mcp = mcp_cls(server_name)
    for tool_name, fn in _make_tools(config).items():
        tool_description = fn.__doc__ or ""

        if hasattr(mcp, "tool"):
            decorator = _get_tool_decorator(
                mcp,
                tool_name=tool_name,
                tool_description=tool_description,
            )
            decorator(fn)
            continue

        if hasattr(mcp, "add_tool"):
            mcp.add_tool(fn, name=tool_name, description=tool_description)
            continue

        raise RuntimeError(
            "Provided MCP class does not expose a supported registration API "
            "(expected .tool(...) or .add_tool(...))."
        )

    return mcp


def _make_tools(config: DeriveConfig) -> Dict[str, Callable[..., str]]:
    def generate_typescript_interfaces(source: str) -> str:
        """Generate TypeScript interfaces for the record classes in Python source."""
        return compile_declarations(source, config=config).render()

    def map_annotation(annotation: str) -> str:
        """Translate one Python type annotation into TypeScript type syntax."""
        node = parse_annotation(annotation)
        return to_ts_type(
            normalize_type(node, strict_generics=config.strict_generics)
        )

    return {
        "generate_typescript_interfaces": generate_typescript_interfaces,
        "map_annotation": map_annotation,
    }


def _get_tool_decorator(mcp: Any, *, tool_name: str, tool_description: str):
    try:
        return mcp.tool(name=tool_name, description=tool_description)
    except TypeError:
        return mcp.tool()
