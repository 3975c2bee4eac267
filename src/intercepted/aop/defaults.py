"""Default return values for calls whose error was converted by a dispatcher."""

from __future__ import annotations

import types
import typing
from collections.abc import Callable
from decimal import Decimal
from typing import Any, Union

# Types with a meaningful "zero" value; everything else defaults to None.
_ZERO_VALUES: dict[type, Callable[[], Any]] = {
    bool: bool,
    int: int,
    float: float,
    complex: complex,
    Decimal: Decimal,
}


def default_value(return_type: Any) -> Any:
    """Return the default value installed when a call fails.

    Numeric value types (``bool``, ``int``, ``float``, ``complex`` and
    ``Decimal``) yield their zero value. Everything else yields ``None``:
    ``str``, ``bytes``, containers (bare or parametrised), other classes,
    ``Any``, ``Optional[...]`` and missing or unresolved annotations.

    >>> default_value(int)
    0
    >>> default_value(list[str]) is None
    True
    >>> default_value(int | None) is None
    True
    """
    if return_type is None or return_type is type(None):
        return None

    origin = typing.get_origin(return_type)
    if origin is Union or origin is types.UnionType:
        # Any union admitting None is nullable; other unions have no single zero.
        return None
    if origin is typing.Annotated:
        return default_value(typing.get_args(return_type)[0])
    if origin is not None:
        return_type = origin

    factory = _ZERO_VALUES.get(return_type) if isinstance(return_type, type) else None
    return factory() if factory is not None else None


def resolve_return_type(method: Callable[..., Any]) -> Any:
    """Resolve the declared return annotation of *method*.

    String annotations are evaluated through :func:`typing.get_type_hints`;
    a missing or unresolvable annotation resolves to ``None``.
    """
    try:
        hints = typing.get_type_hints(method, include_extras=True)
    except (NameError, TypeError, AttributeError, SyntaxError):
        return None
    return hints.get("return")
