"""
PropertyDescriptor model describing one named member of a record.
"""

from enum import Enum

from pydantic import BaseModel


class PropertyKind(str, Enum):
    """
    Classification of a record member.

    DATA: a stored value (mapping key, model field, instance attribute)
    COMPUTED: a value derived on read (property, computed field)
    METHOD: a callable member; exposes no gettable value
    SETTER: a write-only accessor; exposes no gettable value
    """

    DATA = "data"
    COMPUTED = "computed"
    METHOD = "method"
    SETTER = "setter"


DEFAULT_MEMBER_KINDS = frozenset({PropertyKind.DATA, PropertyKind.COMPUTED})


class PropertyDescriptor(BaseModel):
    """
    A named member of a record together with its kind.

    Attributes:
        name: Member name as exposed by the record
        kind: How the member exposes its value
    """

    name: str
    kind: PropertyKind

    model_config = {"frozen": True}

    @property
    def is_gettable(self) -> bool:
        return self.kind in DEFAULT_MEMBER_KINDS
