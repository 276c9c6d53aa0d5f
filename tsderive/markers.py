"""Public markers for selecting record classes to export.

The marker is read from source with ``ast``; at runtime it leaves the
decorated class unchanged.
"""

from typing import Any, Callable, TypeVar, overload

_T = TypeVar("_T", bound=type)


@overload
def typescript_interface(cls: _T) -> _T: ...


@overload
def typescript_interface() -> Callable[[_T], _T]: ...


def typescript_interface(cls: Any = None) -> Any:
    """Mark a class for TypeScript interface export.

    Both ``@typescript_interface`` and ``@typescript_interface()`` are
    accepted.

    Example:
        >>> @typescript_interface
        ... class User:
        ...     name: str
        >>> User.__name__
        'User'
    """
    if cls is None:
        return lambda inner: inner
    return cls
