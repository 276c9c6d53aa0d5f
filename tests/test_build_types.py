import textwrap

from tsderive.build_types import main


def test_main_writes_declarations_and_lists_records(tmp_path, capsys):
    source = tmp_path / "models.py"
    source.write_text(
        textwrap.dedent(
            """
            class Point:
                x: float
                y: float

            class Polygon:
                vertices: List[float]
            """
        ),
        encoding="utf-8",
    )
    output = tmp_path / "out" / "types.d.ts"

    exit_code = main([str(source), "--output", str(output), "--all", "--export"])

    assert exit_code == 0
    text = output.read_text(encoding="utf-8")
    assert "export interface Point {" in text
    assert "    vertices: number[];" in text
    captured = capsys.readouterr()
    assert "- Point" in captured.out
    assert "- Polygon" in captured.out


def test_main_reports_diagnostic_and_fails(tmp_path, capsys):
    source = tmp_path / "models.py"
    source.write_text(
        textwrap.dedent(
            """
            @typescript_interface
            class Event:
                created_at: datetime
            """
        ),
        encoding="utf-8",
    )
    output = tmp_path / "types.d.ts"

    exit_code = main([str(source), "--output", str(output)])

    assert exit_code == 1
    assert not output.exists()
    captured = capsys.readouterr()
    assert "error: Unmapped type on field 'created_at': datetime" in captured.err
    assert "Code: datetime" in captured.err


def test_main_strict_generics_rejects_multi_argument_types(tmp_path, capsys):
    source = tmp_path / "models.py"
    source.write_text(
        textwrap.dedent(
            """
            @typescript_interface
            class Lookup:
                pair: Tuple[int, str]
            """
        ),
        encoding="utf-8",
    )

    exit_code = main(
        [str(source), "--output", str(tmp_path / "types.d.ts"), "--strict-generics"]
    )

    assert exit_code == 1
    assert "first element" in capsys.readouterr().err
