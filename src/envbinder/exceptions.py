"""
Custom exceptions with helpful error messages and suggestions.

Every error raised while binding a record carries enough context to diagnose
the failure without re-running:
- The field being bound (dotted path for nested records)
- The environment variable involved
- The offending raw text, where there is one
"""

from __future__ import annotations

from typing import List, Optional


def _format(title: str, lines: List[str], suggestion: str = "") -> str:
    message = f"\n{'='*60}\n"
    message += f"❌ {title}\n"
    message += f"{'='*60}\n\n"
    for line in lines:
        message += f"{line}\n"
    if suggestion:
        message += f"\n💡 Suggestion: {suggestion}\n"
    message += f"\n{'='*60}\n"
    return message


class EnvBinderError(Exception):
    """Base exception for all envbinder errors."""

    pass


class InvalidInputError(EnvBinderError):
    """Raised when the bind target is not a settable dataclass instance."""

    def __init__(self, issue: str, suggestion: str = ""):
        self.issue = issue
        self.suggestion = suggestion
        super().__init__(_format("Invalid Bind Target", [f"Issue: {issue}"], suggestion))


class MalformedAnnotationError(EnvBinderError):
    """Raised when a field's annotation text does not follow the grammar."""

    def __init__(self, field_name: str, annotation: object, issue: str, suggestion: str = ""):
        self.field_name = field_name
        self.annotation = annotation
        self.issue = issue
        self.suggestion = suggestion

        lines = [
            f"Field: {field_name}",
            f"Annotation: {annotation!r}",
            f"Issue: {issue}",
        ]
        super().__init__(_format(f"Malformed Annotation: '{field_name}'", lines, suggestion))


class MissingRequiredError(EnvBinderError):
    """Raised when a required variable is unset and has no default."""

    def __init__(self, field_name: str, env_var: str):
        self.field_name = field_name
        self.env_var = env_var

        lines = [
            f"Field: {field_name}",
            f"Issue: required environment variable {env_var} not set",
        ]
        suggestion = (
            f"export {env_var}=..., or mark the field with ',optional' "
            f"or ',default=<value>'"
        )
        super().__init__(_format(f"Missing Environment Variable: '{env_var}'", lines, suggestion))


class ConversionError(EnvBinderError):
    """Raised when raw text cannot be parsed into the field's declared type."""

    def __init__(
        self,
        field_name: str,
        raw_value: str,
        target: str,
        element: Optional[str] = None,
        env_var: str = "",
    ):
        self.field_name = field_name
        self.raw_value = raw_value
        self.target = target
        self.element = element
        self.env_var = env_var

        lines = [f"Field: {field_name}"]
        if env_var:
            lines.append(f"Variable: {env_var}")
        lines.append(f"Value: {raw_value!r}")
        if element is not None:
            lines.append(f"Issue: cannot parse element {element!r} as {target}")
        else:
            lines.append(f"Issue: cannot parse {raw_value!r} as {target}")
        super().__init__(_format(f"Conversion Failed: '{field_name}'", lines))


class UnsupportedTypeError(EnvBinderError):
    """Raised when a field's declared type has no string conversion."""

    def __init__(self, field_name: str, declared_type: object, issue: str):
        self.field_name = field_name
        self.declared_type = declared_type
        self.issue = issue

        lines = [
            f"Field: {field_name}",
            f"Type: {declared_type!r}",
            f"Issue: {issue}",
        ]
        suggestion = "Use one of: str, int, bool, float, List[str], List[int]"
        super().__init__(_format(f"Unsupported Field Type: '{field_name}'", lines, suggestion))


__all__ = [
    "EnvBinderError",
    "InvalidInputError",
    "MalformedAnnotationError",
    "MissingRequiredError",
    "ConversionError",
    "UnsupportedTypeError",
]
