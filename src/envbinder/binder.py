"""
Populate dataclass records from environment variables.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Set, Type, TypeVar, get_type_hints

from .annotation import DEFAULT_TAG, Annotation, read_annotation
from .convert import check_supported, convert, type_name, unwrap_optional
from .exceptions import InvalidInputError
from .resolver import resolve_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FieldBinding:
    """
    Description of one annotated leaf field reachable from a record.

    Attributes:
        path: Dotted field path from the top-level record, e.g. ``"db.port"``.
        annotation: Parsed annotation for the field.
        declared_type: The field's declared type (as resolved from type hints).
    """

    path: str
    annotation: Annotation
    declared_type: Any

    @property
    def env(self) -> str:
        return self.annotation.name

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain-JSON-safe representation for logging or documentation."""
        return {
            "path": self.path,
            "env": self.annotation.name,
            "type": type_name(self.declared_type),
            "optional": self.annotation.optional,
            "default": self.annotation.default,
            "required": self.annotation.required,
        }


def _is_record_type(type_hint: Any) -> bool:
    return isinstance(type_hint, type) and dataclasses.is_dataclass(type_hint)


def _is_frozen(record_type: type) -> bool:
    params = getattr(record_type, "__dataclass_params__", None)
    return bool(params and params.frozen)


def _resolve_hints(record_type: type) -> Dict[str, Any]:
    try:
        return get_type_hints(record_type)
    except Exception as exc:
        raise InvalidInputError(
            f"cannot resolve type hints of {record_type.__name__}: {exc}",
            suggestion="Make sure every annotated type is importable at module level",
        ) from exc


class Binder:
    """
    Bind environment variables into dataclass fields.

    Each field carries its annotation in ``dataclasses.field`` metadata under
    ``tag``::

        @dataclass
        class Settings:
            port: int = field(default=0, metadata={"env": "PORT,default=8080"})

        settings = Binder().bind(Settings())

    Fields whose type is itself a dataclass are bound recursively. Fields
    without an annotation and fields whose name starts with ``_`` are left
    untouched.

    Attributes:
        tag: Metadata key holding the annotation text. Default: "env".
        environ: Mapping to read variables from. None reads ``os.environ``
            at bind time.
    """

    def __init__(self, tag: str = DEFAULT_TAG, environ: Optional[Mapping[str, str]] = None):
        if not tag:
            raise InvalidInputError("tag must not be empty", suggestion='Use the default "env"')
        self.tag = tag
        self.environ = environ

    def bind(self, record: T) -> T:
        """
        Populate ``record`` in place and return it.

        Fields are processed in declaration order. The first failure aborts
        the call; fields assigned before it keep their new values.

        Raises:
            InvalidInputError: If ``record`` is not a mutable dataclass instance.
            MalformedAnnotationError: If an annotation does not parse.
            UnsupportedTypeError: If an annotated field's type has no conversion.
            MissingRequiredError: If a required variable is unset.
            ConversionError: If a value does not parse as its field's type.
        """
        self._check_target(record, "record")
        environ = os.environ if self.environ is None else self.environ
        self._bind_record(record, environ, prefix="", active=set())
        return record

    def load(self, record_type: Type[T]) -> T:
        """
        Instantiate ``record_type`` with no arguments and bind it.

        Raises:
            InvalidInputError: If ``record_type`` is not a dataclass or its
                constructor requires arguments.
        """
        if not _is_record_type(record_type):
            raise InvalidInputError(
                f"{record_type!r} is not a dataclass type",
                suggestion="Decorate the settings class with @dataclass",
            )
        try:
            record = record_type()
        except TypeError as exc:
            raise InvalidInputError(
                f"cannot construct {record_type.__name__}() without arguments: {exc}",
                suggestion="Give every field a default, or construct it yourself and call bind()",
            ) from exc
        return self.bind(record)

    def describe(self, record: Any) -> List[FieldBinding]:
        """
        List the annotated leaf fields of a record instance or dataclass type.

        The environment is not read. Nested records are expanded by their
        declared type; a record type already being expanded higher up the
        path is not expanded again.

        Raises:
            InvalidInputError: If ``record`` is neither a dataclass nor an instance of one.
            MalformedAnnotationError: If an annotation does not parse.
            UnsupportedTypeError: If an annotated field's type has no conversion.
        """
        record_type = record if isinstance(record, type) else type(record)
        if not _is_record_type(record_type):
            raise InvalidInputError(
                f"{record_type.__name__} is not a dataclass",
                suggestion="Pass a @dataclass type or instance",
            )
        bindings: List[FieldBinding] = []
        self._describe_type(record_type, bindings, prefix="", active=set())
        return bindings

    def _check_target(self, record: Any, path: str, *, require_mutable: bool = True) -> None:
        if record is None:
            raise InvalidInputError(
                f"{path} must not be None", suggestion="Pass a dataclass instance"
            )
        if isinstance(record, type):
            raise InvalidInputError(
                f"{path} is the class {record.__name__}, not an instance",
                suggestion=f"Use load({record.__name__}) or bind({record.__name__}())",
            )
        if not dataclasses.is_dataclass(record):
            raise InvalidInputError(
                f"{path} must be a dataclass instance, got {type(record).__name__}",
                suggestion="Decorate the settings class with @dataclass",
            )
        if require_mutable and _is_frozen(type(record)):
            raise InvalidInputError(
                f"{path} is a frozen dataclass and cannot be assigned",
                suggestion="Drop frozen=True from the settings class",
            )

    def _bind_record(
        self, record: Any, environ: Mapping[str, str], prefix: str, active: Set[int]
    ) -> None:
        if id(record) in active:
            raise InvalidInputError(f"record at {prefix or 'top level'!r} contains itself")
        active.add(id(record))

        hints = _resolve_hints(type(record))
        for field in dataclasses.fields(record):
            if field.name.startswith("_"):
                continue
            path = prefix + field.name
            declared = hints.get(field.name, field.type)

            if _is_record_type(unwrap_optional(declared)):
                nested = getattr(record, field.name)
                if nested is None:
                    continue
                self._check_target(nested, path, require_mutable=False)
                self._bind_record(nested, environ, f"{path}.", active)
                continue

            annotation = read_annotation(field, self.tag, field_name=path)
            if annotation is None:
                continue
            check_supported(declared, field_name=path)

            raw = resolve_value(annotation, environ, field_name=path)
            if raw is None:
                logger.debug(f"{path}: {annotation.name} not set, optional field left unchanged")
                continue
            if annotation.name in environ:
                logger.debug(f"{path}: bound from environment variable {annotation.name}")
            else:
                logger.debug(f"{path}: {annotation.name} not set, using default")

            if _is_frozen(type(record)):
                raise InvalidInputError(
                    f"{path} belongs to a frozen dataclass and cannot be assigned",
                    suggestion="Drop frozen=True from the nested settings class",
                )
            setattr(
                record,
                field.name,
                convert(raw, declared, field_name=path, env_var=annotation.name),
            )

        active.discard(id(record))

    def _describe_type(
        self, record_type: type, bindings: List[FieldBinding], prefix: str, active: Set[type]
    ) -> None:
        if record_type in active:
            return
        active.add(record_type)

        hints = _resolve_hints(record_type)
        for field in dataclasses.fields(record_type):
            if field.name.startswith("_"):
                continue
            path = prefix + field.name
            declared = hints.get(field.name, field.type)

            nested_type = unwrap_optional(declared)
            if _is_record_type(nested_type):
                self._describe_type(nested_type, bindings, f"{path}.", active)
                continue

            annotation = read_annotation(field, self.tag, field_name=path)
            if annotation is None:
                continue
            check_supported(declared, field_name=path)
            bindings.append(FieldBinding(path=path, annotation=annotation, declared_type=declared))

        active.discard(record_type)


def bind(
    record: T, *, tag: str = DEFAULT_TAG, environ: Optional[Mapping[str, str]] = None
) -> T:
    """Populate ``record`` from the environment. See ``Binder.bind``."""
    return Binder(tag=tag, environ=environ).bind(record)


def load(
    record_type: Type[T], *, tag: str = DEFAULT_TAG, environ: Optional[Mapping[str, str]] = None
) -> T:
    """Instantiate and populate ``record_type``. See ``Binder.load``."""
    return Binder(tag=tag, environ=environ).load(record_type)


__all__ = ["Binder", "FieldBinding", "bind", "load"]
