import textwrap
import warnings

import pytest

from tsderive.declarations import DeclarationSet
from tsderive.errors import UnmappedTypeError
from tsderive.exporter import compile_declarations, export_declarations, generate_declaration
from tsderive.ir import DeriveConfig, FieldDescriptor, RecordDescriptor
from tsderive.typesys import GenericType


def _write_source(path, source: str):
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def test_export_declarations_keeps_every_record(tmp_path):
    users = _write_source(
        tmp_path / "users.py",
        """
        @typescript_interface
        class User:
            name: str
            tags: List[str]
        """,
    )
    teams = _write_source(
        tmp_path / "teams.py",
        """
        @typescript_interface
        class Team:
            members: List[str]
            lead: Optional[str]
        """,
    )
    output = tmp_path / "target" / "types.d.ts"

    declarations = export_declarations([users, teams], output)

    assert declarations.names() == ["User", "Team"]
    assert output.read_text(encoding="utf-8") == (
        "interface User {\n"
        "    name: string;\n"
        "    tags: string[];\n"
        "}\n"
        "\n"
        "interface Team {\n"
        "    members: string[];\n"
        "    lead: string | null;\n"
        "}\n"
    )


def test_export_declarations_merge_upserts_by_name(tmp_path):
    output = tmp_path / "types.d.ts"
    first = _write_source(
        tmp_path / "first.py",
        """
        @typescript_interface
        class User:
            name: str

        @typescript_interface
        class Team:
            size: int
        """,
    )
    export_declarations([first], output)

    second = _write_source(
        tmp_path / "second.py",
        """
        @typescript_interface
        class User:
            name: str
            email: Optional[str]
        """,
    )
    declarations = export_declarations([second], output, merge=True)

    assert declarations.names() == ["User", "Team"]
    text = output.read_text(encoding="utf-8")
    assert "    email: string | null;" in text
    assert "    size: number;" in text


def test_export_declarations_without_merge_overwrites(tmp_path):
    output = tmp_path / "types.d.ts"
    output.write_text("interface Stale {\n    old: string;\n}\n", encoding="utf-8")
    source = _write_source(
        tmp_path / "models.py",
        """
        @typescript_interface
        class Fresh:
            ok: bool
        """,
    )

    export_declarations([source], output)

    assert "Stale" not in output.read_text(encoding="utf-8")


def test_export_declarations_writes_nothing_on_failure(tmp_path):
    output = tmp_path / "types.d.ts"
    source = _write_source(
        tmp_path / "models.py",
        """
        @typescript_interface
        class Good:
            name: str

        @typescript_interface
        class Bad:
            custom: UnknownType
        """,
    )

    with pytest.raises(UnmappedTypeError, match="UnknownType"):
        export_declarations([source], output)

    assert not output.exists()


def test_export_declarations_rejects_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        export_declarations([tmp_path / "missing.py"], tmp_path / "types.d.ts")


def test_compile_declarations_applies_config():
    declarations = compile_declarations(
        textwrap.dedent(
            """
            class Point:
                x: float
            """
        ),
        config=DeriveConfig(include_all=True, exported=True),
    )

    assert declarations.get("Point").startswith("export interface Point {")


def test_compile_declarations_warns_on_duplicate_record():
    source = textwrap.dedent(
        """
        @typescript_interface
        class User:
            name: str

        @typescript_interface
        class User:
            id: int
        """
    )

    with pytest.warns(UserWarning, match="declared more than once"):
        declarations = compile_declarations(source)

    assert declarations.get("User") == "interface User {\n    id: number;\n}"


def test_export_declarations_warns_on_record_repeated_across_files(tmp_path):
    first = _write_source(
        tmp_path / "first.py",
        """
        @typescript_interface
        class User:
            name: str
        """,
    )
    second = _write_source(
        tmp_path / "second.py",
        """
        @typescript_interface
        class User:
            id: int
        """,
    )
    output = tmp_path / "types.d.ts"

    with pytest.warns(UserWarning, match="declared more than once in .*second.py"):
        declarations = export_declarations([first, second], output)

    assert declarations.names() == ["User"]
    assert output.read_text(encoding="utf-8") == "interface User {\n    id: number;\n}\n"


def test_export_declarations_merge_does_not_warn_for_existing_file_records(tmp_path):
    output = tmp_path / "types.d.ts"
    output.write_text("interface User {\n    old: string;\n}\n", encoding="utf-8")
    source = _write_source(
        tmp_path / "models.py",
        """
        @typescript_interface
        class User:
            name: str
        """,
    )

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        export_declarations([source], output, merge=True)

    assert "    name: string;" in output.read_text(encoding="utf-8")


def test_generate_declaration_for_descriptor():
    record = RecordDescriptor(
        "Matrix",
        (FieldDescriptor("cells", GenericType("List", GenericType("List", GenericType("f64")))),),
    )

    assert generate_declaration(record) == "interface Matrix {\n    cells: number[][];\n}"


def test_declaration_set_parse_round_trips_rendered_text():
    declarations = DeclarationSet()
    declarations.upsert("A", "interface A {\n    x: number;\n}")
    declarations.upsert("B", "export interface B {\n}")

    parsed = DeclarationSet.parse(declarations.render())

    assert parsed.names() == ["A", "B"]
    assert parsed.render() == declarations.render()


def test_declaration_set_upsert_keeps_position():
    declarations = DeclarationSet()
    declarations.upsert("A", "interface A {\n}")
    declarations.upsert("B", "interface B {\n}")
    declarations.upsert("A", "interface A {\n    x: string;\n}")

    assert declarations.names() == ["A", "B"]
    assert "x: string" in declarations.get("A")
    with pytest.raises(KeyError, match="No declaration for record 'C'"):
        declarations.get("C")
