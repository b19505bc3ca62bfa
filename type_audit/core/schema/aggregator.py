"""
Incremental aggregation of observed property types across a record stream.
"""

from collections.abc import Iterable
from typing import Any

from type_audit.core.errors import InvalidInputError, TypeResolutionFailure
from type_audit.core.models import (
    DEFAULT_MEMBER_KINDS,
    NULL_TYPE_LABEL,
    PropertyKind,
    PropertyTypes,
    TypeReport,
)
from type_audit.observability.logger import get_logger
from type_audit.observability.metrics import (
    aggregation_duration_seconds,
    increment_counter,
    properties_discovered,
    records_observed_total,
    records_rejected_total,
    set_gauge,
    track_duration,
    type_resolution_failures_total,
)

from .enumerator import enumerate_properties, parse_member_kinds
from .type_labels import resolve_type_label

logger = get_logger(__name__)


class TypeAggregator:
    """
    Collects the distinct types observed for each property of a record stream.

    One aggregator serves one aggregation session. Records are observed one
    at a time in arrival order and are not retained. For every property name
    the aggregator keeps the type labels seen so far, in first-seen order and
    without duplicates; property names keep the order in which they were
    first observed across the whole stream.

    Usage:
        aggregator = TypeAggregator(properties=["amount"])
        for record in records:
            aggregator.observe(record)
        report = aggregator.finalize()
    """

    def __init__(
        self,
        properties: Iterable[str] | None = None,
        exclude_names: Iterable[str] = (),
        member_kinds: Iterable[PropertyKind | str] = DEFAULT_MEMBER_KINDS,
        source_id: str = "default",
    ):
        """
        Initialize an empty aggregation session.

        Args:
            properties: Allow-list of property names; empty or None means all
            exclude_names: Property names to never consider
            member_kinds: Member kinds to consider (default: data and computed)
            source_id: Label used for metrics and logs
        """
        self.properties = list(properties) if properties else None
        self.exclude_names = frozenset(exclude_names)
        self.member_kinds = parse_member_kinds(member_kinds)
        self.source_id = source_id

        self._allowed = frozenset(self.properties) if self.properties else None
        self._types: dict[str, list[str]] = {}
        self._records_observed = 0
        self._records_rejected = 0

    @property
    def records_observed(self) -> int:
        return self._records_observed

    @property
    def records_rejected(self) -> int:
        return self._records_rejected

    def observe(self, record: Any) -> None:
        """
        Fold the property types of one record into the session.

        Args:
            record: A single record

        Raises:
            InvalidInputError: If the record is missing or not introspectable.
                The session is left unchanged.
        """
        names = enumerate_properties(record, self.member_kinds, self.exclude_names)

        if self._allowed is not None:
            # Allowed names missing from this record are skipped
            names = [name for name in names if name in self._allowed]

        for name in names:
            self._add_label(name, self._resolve_label(record, name))

        self._records_observed += 1
        increment_counter(records_observed_total, source_id=self.source_id)

    def observe_many(self, records: Iterable[Any], skip_invalid: bool = False) -> "TypeAggregator":
        """
        Observe every record of an iterable, in order.

        Args:
            records: Record stream, consumed once
            skip_invalid: Log and count invalid records instead of raising

        Returns:
            This aggregator, for chaining into finalize()

        Raises:
            InvalidInputError: On the first invalid record unless skip_invalid
        """
        with track_duration(aggregation_duration_seconds, source_id=self.source_id):
            for position, record in enumerate(records):
                try:
                    self.observe(record)
                except InvalidInputError as e:
                    if not skip_invalid:
                        raise
                    self._reject(position, e)
        return self

    def finalize(self) -> TypeReport:
        """
        Snapshot the accumulated property types.

        Non-destructive: observing more records afterwards continues the
        same session, and calling finalize() again without intervening
        observations returns an equal report.

        Returns:
            TypeReport with properties in first-observed order
        """
        set_gauge(properties_discovered, len(self._types), source_id=self.source_id)

        return TypeReport(
            properties=[
                PropertyTypes(name=name, types=list(labels))
                for name, labels in self._types.items()
            ],
            records_observed=self._records_observed,
            records_rejected=self._records_rejected,
        )

    def _resolve_label(self, record: Any, name: str) -> str:
        try:
            return resolve_type_label(record, name)
        except TypeResolutionFailure as e:
            logger.debug(
                f"Type of '{name}' unresolved, recording as {NULL_TYPE_LABEL}: {e.cause!r}",
                extra={"source_id": self.source_id, "property_name": name},
            )
            increment_counter(type_resolution_failures_total, source_id=self.source_id)
            return NULL_TYPE_LABEL

    def _add_label(self, name: str, label: str) -> None:
        labels = self._types.get(name)

        if labels is None:
            # First sighting fixes the property's position in the report
            self._types[name] = [label]
            logger.debug(
                f"New property '{name}' ({label})",
                extra={"source_id": self.source_id, "property_name": name},
            )
        elif label not in labels:
            labels.append(label)
            logger.debug(
                f"Property '{name}' has additional type {label}",
                extra={"source_id": self.source_id, "property_name": name},
            )

    def _reject(self, position: int, error: InvalidInputError) -> None:
        self._records_rejected += 1
        increment_counter(records_rejected_total, source_id=self.source_id)
        logger.warning(
            f"Skipping record {position}: {error}",
            extra={
                "source_id": self.source_id,
                "record_position": position,
                "record_type": error.record_type,
            },
        )


def aggregate_types(
    records: Iterable[Any],
    properties: Iterable[str] | None = None,
    exclude_names: Iterable[str] = (),
    member_kinds: Iterable[PropertyKind | str] = DEFAULT_MEMBER_KINDS,
    skip_invalid: bool = False,
    source_id: str = "default",
) -> TypeReport:
    """
    Aggregate the property types of a whole record stream.

    Args:
        records: Record stream, consumed once
        properties: Optional allow-list of property names
        exclude_names: Property names to never consider
        member_kinds: Member kinds to consider
        skip_invalid: Skip invalid records instead of raising
        source_id: Label used for metrics and logs

    Returns:
        TypeReport for the stream
    """
    aggregator = TypeAggregator(
        properties=properties,
        exclude_names=exclude_names,
        member_kinds=member_kinds,
        source_id=source_id,
    )
    return aggregator.observe_many(records, skip_invalid=skip_invalid).finalize()
