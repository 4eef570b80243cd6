"""
String to typed value conversion for bindable field types.
"""

from __future__ import annotations

import math
import re
import types
from typing import Any, Callable, Dict, List, Union, get_args, get_origin

from .exceptions import ConversionError, UnsupportedTypeError

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_UNION_TYPES: tuple = (Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES += (types.UnionType,)


def unwrap_optional(type_hint: Any) -> Any:
    """Unwrap Optional[T] (or ``T | None``) to T."""
    origin = get_origin(type_hint)
    if origin in _UNION_TYPES:
        non_none_args = [a for a in get_args(type_hint) if a is not type(None)]
        if len(non_none_args) == 1:
            return unwrap_optional(non_none_args[0])
    return type_hint


def parse_int(text: str) -> int:
    # int() alone would accept whitespace, underscores and unicode digits
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if value < _INT_MIN or value > _INT_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def parse_bool(text: str) -> bool:
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid syntax: {text!r}")


def parse_float(text: str) -> float:
    if not text.isascii() or text != text.strip() or "_" in text:
        raise ValueError(f"invalid syntax: {text!r}")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"value out of range: {text!r}")
    return value


_SCALAR_PARSERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    int: parse_int,
    bool: parse_bool,
    float: parse_float,
}

_LIST_ELEMENT_PARSERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    int: parse_int,
}


def type_name(type_hint: Any) -> str:
    """Readable name for a declared type, e.g. ``List[int]``."""
    type_hint = unwrap_optional(type_hint)
    if get_origin(type_hint) is list:
        args = get_args(type_hint)
        if args:
            return f"List[{type_name(args[0])}]"
        return "list"
    return getattr(type_hint, "__name__", repr(type_hint))


def check_supported(type_hint: Any, *, field_name: str = "<field>") -> None:
    """
    Verify a declared type has a conversion without converting anything.

    Raises:
        UnsupportedTypeError: If neither a scalar nor a list conversion exists.
    """
    target = unwrap_optional(type_hint)
    if target in _SCALAR_PARSERS:
        return
    if target is list or get_origin(target) is list:
        args = get_args(target)
        if len(args) != 1 or args[0] not in _LIST_ELEMENT_PARSERS:
            element = type_name(args[0]) if args else "Any"
            raise UnsupportedTypeError(
                field_name, type_hint, f"unsupported list element type {element}"
            )
        return
    raise UnsupportedTypeError(
        field_name, type_hint, f"unsupported field type {type_name(type_hint)}"
    )


def split_list(raw: str) -> List[str]:
    if raw == "":
        return []
    return raw.split(",")


def convert(raw: str, type_hint: Any, *, field_name: str = "<field>", env_var: str = "") -> Any:
    """
    Convert raw environment text into a value of the declared type.

    Args:
        raw: Resolved text (environment value or default literal).
        type_hint: Declared field type; ``Optional[...]`` is unwrapped.
        field_name: Used in error messages.
        env_var: Used in error messages.

    Returns:
        The converted value. List types always produce a new list.

    Raises:
        ConversionError: If the text does not parse as the declared type.
        UnsupportedTypeError: If the declared type has no conversion.
    """
    check_supported(type_hint, field_name=field_name)
    target = unwrap_optional(type_hint)

    if target in _SCALAR_PARSERS:
        try:
            return _SCALAR_PARSERS[target](raw)
        except ValueError as exc:
            raise ConversionError(
                field_name, raw, target.__name__, env_var=env_var
            ) from exc

    (element_type,) = get_args(target)
    parse_element = _LIST_ELEMENT_PARSERS[element_type]
    result = []
    for element in split_list(raw):
        try:
            result.append(parse_element(element))
        except ValueError as exc:
            raise ConversionError(
                field_name, raw, element_type.__name__, element=element, env_var=env_var
            ) from exc
    return result


__all__ = [
    "check_supported",
    "convert",
    "parse_bool",
    "parse_float",
    "parse_int",
    "split_list",
    "type_name",
    "unwrap_optional",
]
