"""
Property enumeration, type labelling and type aggregation.
"""

from .aggregator import TypeAggregator, aggregate_types
from .enumerator import (
    describe_members,
    enumerate_properties,
    parse_member_kinds,
    read_property,
)
from .type_labels import resolve_type_label, type_label

__all__ = [
    "TypeAggregator",
    "aggregate_types",
    "describe_members",
    "enumerate_properties",
    "parse_member_kinds",
    "read_property",
    "resolve_type_label",
    "type_label",
]
