from typing import Iterable, List, Tuple

from tsderive.errors import derive_node_context
from tsderive.ir import FieldDescriptor, RecordDescriptor
from tsderive.typesys import to_ts_type

INDENT = "    "


class TSGenerator:
    def generate(self, record: RecordDescriptor, *, exported: bool = False) -> str:
        """Render one record as a TypeScript interface declaration.

        Every field is mapped before any text is assembled, so a failing
        field leaves no partial declaration behind.
        """
        rendered = [(f.name, self.render_field(f)) for f in record.fields]
        return self.emit_interface(record.name, rendered, exported=exported)

    def render_field(self, field: FieldDescriptor) -> str:
        with derive_node_context(field.node):
            return to_ts_type(field.type, field=field.name)

    def emit_interface(
        self,
        name: str,
        fields: Iterable[Tuple[str, str]],
        *,
        exported: bool = False,
    ) -> str:
        prefix = "export " if exported else ""
        lines: List[str] = [f"{prefix}interface {name} {{"]
        for field_name, ts_type in fields:
            lines.append(f"{INDENT}{field_name}: {ts_type};")
        lines.append("}")
        return "\n".join(lines)
