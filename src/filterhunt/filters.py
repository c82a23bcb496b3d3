"""
Event filter enumeration.

Queries ``__EventFilter`` in a single namespace and turns the instances into
either :class:`EventFilterRecord` projections or raw property mappings.
"""

from dataclasses import dataclass, astuple
from typing import List, Union

from .common import getColoredLogger
from .connection import QueryResult, instance_properties, run_query
from .defaults import EVENT_FILTER_QUERY, FILTER_PROPERTIES, RECORD_FIELDS

logger = getColoredLogger("filterhunt.filters")


@dataclass(frozen=True)
class EventFilterRecord:
    Namespace: str
    FilterName: str
    EventNamespace: str
    FilterQuery: str

    def as_row(self):
        return tuple("" if v is None else str(v) for v in astuple(self))

    def as_dict(self):
        return dict(zip(RECORD_FIELDS, astuple(self)))


def project_filter(namespace: str, instance) -> EventFilterRecord:
    return EventFilterRecord(
        namespace,
        *(getattr(instance, FILTER_PROPERTIES[field]) for field in RECORD_FIELDS[1:]),
    )


def query_filters(connector, namespace: str) -> QueryResult:
    return run_query(connector, namespace, EVENT_FILTER_QUERY)


def enumerate_filters(connector, namespace: str, raw: bool = False) -> List[Union[EventFilterRecord, dict]]:
    """
    All event filters in namespace: projected records, or with raw every
    property WMI returned. An unreachable namespace has no filters.
    """
    result = query_filters(connector, namespace)
    if not result.ok:
        logger.debug(f"No event filters read from {namespace}: {result.error}")
        return []
    if raw:
        return [instance_properties(instance) for instance in result.items]
    return [project_filter(namespace, instance) for instance in result.items]


def name_matches(candidate, name, like=False):
    """
    WMI names compare case-insensitively. With like, name may appear
    anywhere in candidate, taken literally (no wildcards).
    """
    if candidate is None:
        return False
    candidate = candidate.casefold()
    name = name.casefold()
    if like:
        return name in candidate
    return candidate == name
