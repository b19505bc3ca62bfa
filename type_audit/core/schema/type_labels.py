"""
Type labels for observed property values.

A type label is an opaque string naming the exact runtime type of a value.
Labels are compared for equality only; no widening or unification.
"""

from typing import Any

from type_audit.core.errors import TypeResolutionFailure
from type_audit.core.models import NULL_TYPE_LABEL

from .enumerator import read_property

BUILTIN_MODULE = "builtins"


def type_label(value: Any) -> str:
    """
    Get the type label for a value.

    Builtin types are labelled by bare name ("str", "int"); all others by
    module-qualified name ("datetime.datetime", "decimal.Decimal").

    Args:
        value: Any value

    Returns:
        Type label, or NULL_TYPE_LABEL for None
    """
    if value is None:
        return NULL_TYPE_LABEL

    value_type = type(value)
    module = getattr(value_type, "__module__", None)
    qualname = getattr(value_type, "__qualname__", None) or value_type.__name__

    if not module or module == BUILTIN_MODULE:
        return qualname
    return f"{module}.{qualname}"


def resolve_type_label(record: Any, name: str) -> str:
    """
    Read a property and label the type of its current value.

    Args:
        record: Record exposing the property
        name: Property name

    Returns:
        Type label of the property's value

    Raises:
        TypeResolutionFailure: If the value cannot be read or typed
    """
    try:
        return type_label(read_property(record, name))
    except Exception as e:
        raise TypeResolutionFailure(name, e) from e
