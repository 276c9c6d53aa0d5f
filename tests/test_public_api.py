from __future__ import annotations

import tsderive
import pytest

from tsderive.errors import DeriveError


def test_public_api_exposes_version() -> None:
    assert isinstance(tsderive.__version__, str)


def test_public_api_all_contains_core_exports() -> None:
    exported = set(tsderive.__all__)
    assert "compile_declarations" in exported
    assert "export_declarations" in exported
    assert "typescript_interface" in exported
    assert "__version__" in exported


def test_marker_leaves_class_unchanged() -> None:
    @tsderive.typescript_interface
    class User:
        name: str

    @tsderive.typescript_interface()
    class Team:
        size: int

    assert User.__name__ == "User"
    assert Team.__annotations__ == {"size": "int"}


def test_compile_declarations_rejects_empty_source_with_actionable_message() -> None:
    with pytest.raises(DeriveError, match="Source is empty"):
        tsderive.compile_declarations("   ")
