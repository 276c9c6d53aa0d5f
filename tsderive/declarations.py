import re
from typing import Dict, Iterator, List, Tuple


_DECLARATION_RE = re.compile(
    r"^(?:export\s+)?interface\s+(?P<name>[A-Za-z_$][\w$]*)\s*\{.*?^\}",
    re.MULTILINE | re.DOTALL,
)


class DeclarationSet:
    """
    Holds generated interface declarations for one build run, keyed by
    record name in first-seen order.
    """

    def __init__(self):
        self._declarations: Dict[str, str] = {}

    def upsert(self, name: str, text: str) -> None:
        """Insert ``text`` for ``name``, replacing an earlier one in place."""
        self._declarations[name] = text

    def update(self, other: "DeclarationSet") -> None:
        for name, text in other.items():
            self.upsert(name, text)

    def get(self, name: str) -> str:
        try:
            return self._declarations[name]
        except KeyError as exc:
            raise KeyError(f"No declaration for record '{name}'.") from exc

    def names(self) -> List[str]:
        return list(self._declarations)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._declarations.items()))

    def render(self) -> str:
        if not self._declarations:
            return ""
        return "\n\n".join(self._declarations.values()) + "\n"

    @classmethod
    def parse(cls, text: str) -> "DeclarationSet":
        """Load declarations from a file previously written by :meth:`render`."""
        declarations = cls()
        for match in _DECLARATION_RE.finditer(text):
            declarations.upsert(match.group("name"), match.group(0))
        return declarations

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)
