"""
Resolve the raw text for an annotated field.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .annotation import Annotation
from .exceptions import MissingRequiredError


def resolve_value(
    annotation: Annotation, environ: Mapping[str, str], *, field_name: str = "<field>"
) -> Optional[str]:
    """
    Pick the text to convert for a field.

    Priority: environment value (even if empty) > default literal > optional.

    Returns:
        The raw text, or None when the field is optional and nothing is set,
        in which case the field must be left untouched.

    Raises:
        MissingRequiredError: If the variable is unset, there is no default
            and the field is not optional.
    """
    value = environ.get(annotation.name)
    if value is not None:
        return value
    if annotation.default:
        return annotation.default
    if annotation.optional:
        return None
    raise MissingRequiredError(field_name, annotation.name)


__all__ = ["resolve_value"]
