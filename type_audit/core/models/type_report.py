"""
TypeReport model holding the outcome of a type aggregation session.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

NULL_TYPE_LABEL = "null"

TABLE_HEADERS = ("Name", "Value")


class PropertyTypes(BaseModel):
    """
    Distinct type labels observed for one property.

    Attributes:
        name: Property name
        types: Type labels in first-seen order, without duplicates
    """

    name: str
    types: list[str] = Field(default_factory=list)

    @field_validator("types")
    @classmethod
    def check_unique_types(cls, v):
        """Validate that no type label is listed twice."""
        if len(set(v)) != len(v):
            raise ValueError("types must not contain duplicate labels")
        return v

    @property
    def is_uniform(self) -> bool:
        """True when exactly one non-null type was observed."""
        return len([t for t in self.types if t != NULL_TYPE_LABEL]) == 1

    @property
    def is_nullable(self) -> bool:
        return NULL_TYPE_LABEL in self.types


class TypeReport(BaseModel):
    """
    Ordered mapping of property name to observed type labels.

    Properties appear in the order they were first observed across the
    whole record stream.

    Attributes:
        properties: One entry per distinct property name
        records_observed: Records successfully inspected
        records_rejected: Records skipped because they could not be inspected
    """

    properties: list[PropertyTypes] = Field(default_factory=list)
    records_observed: int = Field(0, ge=0)
    records_rejected: int = Field(0, ge=0)

    @field_validator("properties")
    @classmethod
    def check_unique_names(cls, v):
        """Validate that each property name appears at most once."""
        names = [entry.name for entry in v]
        if len(set(names)) != len(names):
            raise ValueError("properties must not contain duplicate names")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "properties": [
                    {"name": "prop1", "types": ["str"]},
                    {"name": "prop2", "types": ["datetime.datetime", "int"]},
                ],
                "records_observed": 2,
                "records_rejected": 0,
            }
        }

    def names(self) -> list[str]:
        return [entry.name for entry in self.properties]

    def get(self, name: str) -> list[str] | None:
        """
        Get the type labels observed for a property.

        Args:
            name: Property name (exact match)

        Returns:
            Type labels, or None if the property was never observed
        """
        for entry in self.properties:
            if entry.name == name:
                return list(entry.types)
        return None

    def as_dict(self) -> dict[str, list[str]]:
        return {entry.name: list(entry.types) for entry in self.properties}

    def to_rows(self) -> list[tuple[str, list[str]]]:
        """Rows for the two-column (Name, Value) rendering."""
        return [(entry.name, list(entry.types)) for entry in self.properties]

    def render_table(self) -> str:
        """
        Render the report as a fixed-width Name/Value table.

        Returns:
            Table text without a trailing newline
        """
        rows = [
            (name, "{" + ", ".join(types) + "}")
            for name, types in self.to_rows()
        ]
        name_width = max([len(TABLE_HEADERS[0])] + [len(name) for name, _ in rows])

        lines = [
            f"{TABLE_HEADERS[0]:<{name_width}} {TABLE_HEADERS[1]}",
            f"{'-' * len(TABLE_HEADERS[0]):<{name_width}} {'-' * len(TABLE_HEADERS[1])}",
        ]
        for name, value in rows:
            lines.append(f"{name:<{name_width}} {value}")
        return "\n".join(lines)

    def summary(self) -> dict[str, Any]:
        """Counters suitable for structured log fields."""
        return {
            "properties": len(self.properties),
            "records_observed": self.records_observed,
            "records_rejected": self.records_rejected,
            "mixed_type_properties": [
                entry.name for entry in self.properties if len(entry.types) > 1
            ],
        }
