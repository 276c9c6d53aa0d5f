import warnings
from pathlib import Path
from typing import Iterable, List, Optional, Union

from tsderive.compiler import InterfaceCompiler
from tsderive.declarations import DeclarationSet
from tsderive.errors import derive_source_context
from tsderive.ir import DeriveConfig, RecordDescriptor
from tsderive.ts_generator import TSGenerator

DEFAULT_OUTPUT = Path("target") / "types.d.ts"


def generate_declaration(record: RecordDescriptor, *, exported: bool = False) -> str:
    """Render one :class:`RecordDescriptor` as interface declaration text."""
    return TSGenerator().generate(record, exported=exported)


def compile_records(
    source: str,
    *,
    config: Optional[DeriveConfig] = None,
) -> List[RecordDescriptor]:
    """Compile Python source into the records selected for export."""
    config = config or DeriveConfig()
    compiler = InterfaceCompiler(strict_generics=config.strict_generics)
    return compiler.compile(source, include_all=config.include_all)


def compile_declarations(
    source: str,
    *,
    config: Optional[DeriveConfig] = None,
    source_path: Optional[str] = None,
) -> DeclarationSet:
    """Compile Python source and render every selected record.

    Raises:
        DeriveError: On the first record that cannot be generated; no
            declarations are returned in that case.
    """
    config = config or DeriveConfig()
    records = compile_records(source, config=config)
    generator = TSGenerator()
    declarations = DeclarationSet()
    with derive_source_context(source):
        for record in records:
            if record.name in declarations:
                where = f" in {source_path}" if source_path else ""
                warnings.warn(
                    f"Record '{record.name}' is declared more than once{where}; "
                    "the last definition wins.",
                    stacklevel=2,
                )
            declarations.upsert(
                record.name, generator.generate(record, exported=config.exported)
            )
    return declarations


def export_declarations(
    sources: Iterable[Union[str, Path]],
    output_path: Union[str, Path] = DEFAULT_OUTPUT,
    *,
    config: Optional[DeriveConfig] = None,
    merge: bool = False,
) -> DeclarationSet:
    """Compile source files and write all declarations to ``output_path`` once.

    With ``merge`` the declarations already present in ``output_path`` are
    kept and records generated in this run replace them by name.
    """
    config = config or DeriveConfig()
    out_path = Path(output_path)

    declarations = DeclarationSet()
    if merge and out_path.exists():
        declarations = DeclarationSet.parse(out_path.read_text(encoding="utf-8"))

    generated = DeclarationSet()
    for source_file in sources:
        path = Path(source_file)
        if not path.is_file():
            raise FileNotFoundError(f"Source file not found: {path}")
        compiled = compile_declarations(
            path.read_text(encoding="utf-8"),
            config=config,
            source_path=str(path),
        )
        for name in compiled.names():
            if name in generated:
                warnings.warn(
                    f"Record '{name}' is declared more than once in {path}; "
                    "the last definition wins.",
                    stacklevel=2,
                )
        generated.update(compiled)
    declarations.update(generated)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(declarations.render(), encoding="utf-8")
    return declarations
