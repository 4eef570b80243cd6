"""
Helpers for declaring bindable dataclass fields.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping, Optional

from .annotation import DEFAULT_TAG


def env_field(
    annotation: str,
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Optional[Callable[[], Any]] = None,
    tag: str = DEFAULT_TAG,
    metadata: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> Any:
    """
    Declare a dataclass field bound to an environment variable.

    Shorthand for ``field(default=..., metadata={"env": annotation})``. The
    annotation is validated when the record is bound, not here.

    Args:
        annotation: Annotation text, e.g. ``"PORT,default=8080"``.
        default: Python-side default used when constructing the record.
        default_factory: Factory for mutable defaults such as lists.
        tag: Metadata key the binder reads (must match ``Binder(tag=...)``).
        metadata: Extra metadata merged alongside the annotation.
        **kwargs: Passed through to ``dataclasses.field``.

    Example:
        >>> @dataclass
        ... class Settings:
        ...     port: int = env_field("PORT,default=8080", default=0)
        ...     hosts: List[str] = env_field("HOSTS,optional", default_factory=list)
    """
    merged = dict(metadata or {})
    merged[tag] = annotation
    if default_factory is not None:
        return dataclasses.field(default_factory=default_factory, metadata=merged, **kwargs)
    return dataclasses.field(default=default, metadata=merged, **kwargs)


__all__ = ["env_field"]
