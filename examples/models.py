"""Sample record classes for ``tsderive examples/models.py``."""

from dataclasses import dataclass, field
from typing import Annotated, ClassVar, List, Optional, Tuple

from tsderive import typescript_interface


@typescript_interface
@dataclass
class User:
    name: str
    age: int
    tags: List[str] = field(default_factory=list)
    nickname: Optional[str] = None


@typescript_interface
@dataclass
class Measurement:
    matrix: List[List[float]]
    origin: Tuple[float]
    label: Annotated[str, "display"]
    unit: "Optional[str]" = None
    registry: ClassVar[int] = 0


class NotExported:
    secret: str
