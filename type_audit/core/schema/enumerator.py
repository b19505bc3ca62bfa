"""
Property enumeration for loosely-structured records.

Lists the named members a record exposes, classifies them by kind, and
reads individual property values. This is the only module that reflects
on records; the aggregator works purely with names and values.
"""

import dataclasses
import functools
import inspect
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel
from pyspark.sql import Row

from type_audit.core.errors import InvalidInputError
from type_audit.core.models import DEFAULT_MEMBER_KINDS, PropertyDescriptor, PropertyKind

# Values that are themselves data, not records holding data
SCALAR_TYPES = (str, bytes, bytearray, bool, int, float, complex)


def parse_member_kinds(values: Iterable[PropertyKind | str]) -> frozenset[PropertyKind]:
    """
    Normalize member kind names into PropertyKind values.

    Args:
        values: PropertyKind members or their names ("data", "computed", ...)

    Returns:
        Frozen set of PropertyKind

    Raises:
        ValueError: If a kind name is unknown
    """
    kinds = set()
    for value in values:
        if isinstance(value, PropertyKind):
            kinds.add(value)
            continue
        try:
            kinds.add(PropertyKind(str(value).strip().lower()))
        except ValueError:
            allowed = ", ".join(kind.value for kind in PropertyKind)
            raise ValueError(f"Unknown member kind '{value}'. Expected one of: {allowed}")
    return frozenset(kinds)


def describe_members(record: Any) -> list[PropertyDescriptor]:
    """
    List every named member of a record with its kind.

    Order follows the record's own declaration order.

    Args:
        record: A mapping, pydantic model, dataclass, Spark Row or plain object

    Returns:
        Member descriptors, possibly empty

    Raises:
        InvalidInputError: If no record is given or it is a bare scalar
    """
    if record is None:
        raise InvalidInputError("No record supplied")

    if isinstance(record, SCALAR_TYPES):
        raise InvalidInputError(
            f"Cannot introspect properties of a {type(record).__name__} value",
            record_type=type(record).__name__,
        )

    if isinstance(record, Row):
        return _describe_row(record)
    if isinstance(record, Mapping):
        return _describe_mapping(record)
    if isinstance(record, BaseModel):
        return _describe_model(record)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return _describe_dataclass(record)
    return _describe_object(record)


def enumerate_properties(
    record: Any,
    member_kinds: Iterable[PropertyKind | str] = DEFAULT_MEMBER_KINDS,
    exclude_names: Iterable[str] = (),
) -> list[str]:
    """
    List the property names of a record to consider for type auditing.

    Args:
        record: A single record (not a collection of records)
        member_kinds: Member kinds to include (default: data and computed)
        exclude_names: Property names to leave out

    Returns:
        Property names in the record's declaration order

    Raises:
        InvalidInputError: If the record is missing or not introspectable
    """
    kinds = parse_member_kinds(member_kinds)
    excluded = frozenset(exclude_names)

    return [
        member.name
        for member in describe_members(record)
        if member.kind in kinds and member.name not in excluded
    ]


def read_property(record: Any, name: str) -> Any:
    """
    Read the current value of a named property.

    Args:
        record: Record previously enumerated
        name: Property name

    Returns:
        The property value

    Raises:
        KeyError, AttributeError, or whatever the member's accessor raises
    """
    if isinstance(record, (Row, Mapping)):
        return record[name]
    return getattr(record, name)


def _describe_row(record: Row) -> list[PropertyDescriptor]:
    # Row.__getattr__ raises for dunder names, so a default is required
    fields = getattr(record, "__fields__", None)
    if fields is None:
        raise InvalidInputError(
            "Cannot introspect a Row without field names",
            record_type="Row",
        )
    return [PropertyDescriptor(name=name, kind=PropertyKind.DATA) for name in fields]


def _describe_mapping(record: Mapping) -> list[PropertyDescriptor]:
    return [
        PropertyDescriptor(name=key, kind=PropertyKind.DATA)
        for key in record.keys()
        if isinstance(key, str)
    ]


def _describe_model(record: BaseModel) -> list[PropertyDescriptor]:
    model_class = type(record)
    members = [
        PropertyDescriptor(name=name, kind=PropertyKind.DATA)
        for name in model_class.model_fields
    ]

    # Extra fields are only present with extra="allow"
    extra = record.model_extra or {}
    members.extend(
        PropertyDescriptor(name=name, kind=PropertyKind.DATA)
        for name in extra
        if name not in model_class.model_fields
    )

    members.extend(
        PropertyDescriptor(name=name, kind=PropertyKind.COMPUTED)
        for name in model_class.model_computed_fields
    )

    seen = {member.name for member in members}
    members.extend(_describe_model_accessors(model_class, seen))
    return members


def _describe_model_accessors(model_class: type, seen: set[str]) -> list[PropertyDescriptor]:
    """
    List plain properties declared on a model class and its model bases.

    BaseModel itself and pydantic's model_* namespace are not walked.
    """
    members = []
    for owner in model_class.__mro__:
        if owner is BaseModel or not issubclass(owner, BaseModel):
            continue
        for name, attribute in vars(owner).items():
            if name in seen or _is_private(name) or name.startswith("model_"):
                continue
            if not isinstance(attribute, (property, functools.cached_property)):
                continue
            seen.add(name)
            members.append(PropertyDescriptor(name=name, kind=_classify_class_attribute(attribute)))
    return members


def _describe_dataclass(record: Any) -> list[PropertyDescriptor]:
    members = [
        PropertyDescriptor(name=field.name, kind=PropertyKind.DATA)
        for field in dataclasses.fields(record)
    ]
    seen = {member.name for member in members}
    members.extend(_describe_class_members(type(record), seen))
    return members


def _describe_object(record: Any) -> list[PropertyDescriptor]:
    members = []
    seen: set[str] = set()

    for name in _instance_attribute_names(record):
        if name in seen or _is_private(name):
            continue
        seen.add(name)
        members.append(PropertyDescriptor(name=name, kind=PropertyKind.DATA))

    members.extend(_describe_class_members(type(record), seen))
    return members


def _instance_attribute_names(record: Any) -> list[str]:
    names = list(getattr(record, "__dict__", {}))

    # Slotted attributes only count once they have been assigned
    for klass in type(record).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in names and hasattr(record, slot):
                names.append(slot)
    return names


def _describe_class_members(klass: type, seen: set[str]) -> list[PropertyDescriptor]:
    members = []
    for owner in klass.__mro__:
        if owner is object:
            continue
        for name, attribute in vars(owner).items():
            if name in seen or _is_private(name):
                continue
            seen.add(name)

            kind = _classify_class_attribute(attribute)
            if kind is not None:
                members.append(PropertyDescriptor(name=name, kind=kind))
    return members


def _classify_class_attribute(attribute: Any) -> PropertyKind | None:
    """
    Classify an attribute found in a class namespace.

    Returns:
        The member kind, or None for slot descriptors (handled per instance)
    """
    if isinstance(attribute, property):
        return PropertyKind.COMPUTED if attribute.fget is not None else PropertyKind.SETTER
    if isinstance(attribute, functools.cached_property):
        return PropertyKind.COMPUTED
    if isinstance(attribute, (staticmethod, classmethod)) or callable(attribute):
        return PropertyKind.METHOD
    if inspect.ismemberdescriptor(attribute):
        return None
    if inspect.isdatadescriptor(attribute):
        return PropertyKind.COMPUTED
    return PropertyKind.DATA


def _is_private(name: str) -> bool:
    return name.startswith("_")
