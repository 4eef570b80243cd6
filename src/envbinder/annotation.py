"""
Per-field annotation parsing.

Grammar::

    annotation := name ("," option)*
    option     := "optional" | "default=" literal

Default literals cannot contain commas; the annotation is split on every comma.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from .exceptions import MalformedAnnotationError

DEFAULT_TAG = "env"

_OPTIONAL = "optional"
_DEFAULT = "default"
_DEFAULT_PREFIX = "default="


@dataclass(frozen=True)
class Annotation:
    """
    Parsed binding options for a single field.

    Attributes:
        name: Environment variable to read.
        optional: Leave the field untouched when the variable is unset.
        default: Literal used when the variable is unset (None if not given).
    """

    name: str
    optional: bool = False
    default: Optional[str] = None

    @property
    def required(self) -> bool:
        return not self.optional and self.default is None


def parse_annotation(text: object, *, field_name: str = "<field>") -> Annotation:
    """
    Parse and validate annotation text such as ``"PORT,default=8080"``.

    Raises:
        MalformedAnnotationError: If the text is empty, has no name, carries a
            ``default`` option without a value, or carries an unknown option.
    """
    if not isinstance(text, str):
        raise MalformedAnnotationError(
            field_name,
            text,
            "annotation must be a string",
            suggestion='Use e.g. metadata={"env": "APP_NAME"}',
        )
    if text == "":
        raise MalformedAnnotationError(
            field_name,
            text,
            "annotation must not be empty",
            suggestion="Name the environment variable, or drop the annotation to skip the field",
        )

    parts = text.split(",")
    if parts[0] == "":
        raise MalformedAnnotationError(
            field_name,
            text,
            "annotation must have a name",
            suggestion="The first comma-separated segment is the variable name",
        )

    optional = False
    default: Optional[str] = None
    for part in parts[1:]:
        if part == _OPTIONAL:
            optional = True
        elif part == _DEFAULT or part == _DEFAULT_PREFIX:
            raise MalformedAnnotationError(
                field_name,
                text,
                "default option must have a value",
                suggestion=f"Write '{parts[0]},default=<value>'",
            )
        elif part.startswith(_DEFAULT_PREFIX):
            default = part[len(_DEFAULT_PREFIX) :]
        else:
            raise MalformedAnnotationError(
                field_name,
                text,
                f"unknown annotation option: {part}",
                suggestion="Supported options: 'optional', 'default=<value>'",
            )

    return Annotation(name=parts[0], optional=optional, default=default)


def read_annotation(
    field: dataclasses.Field, tag: str = DEFAULT_TAG, *, field_name: Optional[str] = None
) -> Optional[Annotation]:
    """Return the parsed annotation stored under ``tag`` in the field's metadata, or None."""
    if tag not in field.metadata:
        return None
    return parse_annotation(field.metadata[tag], field_name=field_name or field.name)


__all__ = ["Annotation", "DEFAULT_TAG", "parse_annotation", "read_annotation"]
