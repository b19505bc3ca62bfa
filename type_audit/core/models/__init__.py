"""
Core data models for record type auditing.

All models use Pydantic for runtime validation.
"""

from .property_descriptor import DEFAULT_MEMBER_KINDS, PropertyDescriptor, PropertyKind
from .type_report import NULL_TYPE_LABEL, PropertyTypes, TypeReport

__all__ = [
    "DEFAULT_MEMBER_KINDS",
    "NULL_TYPE_LABEL",
    "PropertyDescriptor",
    "PropertyKind",
    "PropertyTypes",
    "TypeReport",
]
