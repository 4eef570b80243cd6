"""Public exports for the envbinder package."""

from .annotation import DEFAULT_TAG, Annotation, parse_annotation, read_annotation
from .binder import Binder, FieldBinding, bind, load
from .convert import convert
from .exceptions import (
    ConversionError,
    EnvBinderError,
    InvalidInputError,
    MalformedAnnotationError,
    MissingRequiredError,
    UnsupportedTypeError,
)
from .fields import env_field
from .resolver import resolve_value

__version__ = "0.1.0"

__all__ = [
    "Binder",
    "FieldBinding",
    "bind",
    "load",
    "env_field",
    "Annotation",
    "DEFAULT_TAG",
    "parse_annotation",
    "read_annotation",
    "resolve_value",
    "convert",
    # Exceptions
    "EnvBinderError",
    "InvalidInputError",
    "MalformedAnnotationError",
    "MissingRequiredError",
    "ConversionError",
    "UnsupportedTypeError",
]
