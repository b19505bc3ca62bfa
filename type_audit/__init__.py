"""
type-audit: discover the runtime types each property of a record stream holds.
"""

from type_audit.core.errors import InvalidInputError, TypeAuditError
from type_audit.core.models import NULL_TYPE_LABEL, PropertyKind, PropertyTypes, TypeReport
from type_audit.core.schema import TypeAggregator, aggregate_types, enumerate_properties, type_label

__version__ = "0.1.0"

__all__ = [
    "InvalidInputError",
    "NULL_TYPE_LABEL",
    "PropertyKind",
    "PropertyTypes",
    "TypeAggregator",
    "TypeAuditError",
    "TypeReport",
    "aggregate_types",
    "enumerate_properties",
    "type_label",
]
