"""
Event filter removal.

Removal is two explicit steps. :func:`preview_removal` queries the namespace
and freezes the matching instances into a :class:`RemovalPreview`. Once the
operator has answered, :func:`delete_matches` deletes exactly the instances
in that preview; the namespace is not queried a second time.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from .common import getColoredLogger
from .connection import delete_instance
from .defaults import CONFIRM_TOKEN
from .filters import EventFilterRecord, name_matches, project_filter, query_filters

logger = getColoredLogger("filterhunt.remover")


class RemovalDeclined(Exception):
    """
    The operator answered anything other than the confirmation token.
    """
    def __init__(self, preview, response):
        super().__init__(
            f"Removal of {len(preview.matches)} event filter(s) from {preview.namespace} declined"
        )
        self.preview = preview
        self.response = response


@dataclass(frozen=True)
class RemovalPreview:
    namespace: str
    name: str
    like: bool
    matches: Tuple[Tuple[EventFilterRecord, Any], ...]

    @property
    def records(self) -> List[EventFilterRecord]:
        return [record for record, _ in self.matches]

    def __len__(self):
        return len(self.matches)


def preview_removal(connector, namespace: str, name: str, like: bool = False) -> RemovalPreview:
    if not name:
        raise ValueError("A filter name is required for removal")

    result = query_filters(connector, namespace)
    if not result.ok:
        # Same as an empty namespace: nothing to remove
        logger.debug(f"Could not query event filters in {namespace}: {result.error}")

    matches = tuple(
        (project_filter(namespace, instance), instance)
        for instance in result.items
        if name_matches(getattr(instance, "Name", None), name, like)
    )
    return RemovalPreview(namespace, name, like, matches)


def delete_matches(preview: RemovalPreview) -> List[EventFilterRecord]:
    deleted = []
    for record, instance in preview.matches:
        delete_instance(instance)
        logger.info(f"Removed event filter {record.FilterName} from {record.Namespace}")
        deleted.append(record)
    return deleted


def remove_filters(
    connector,
    namespace: str,
    name: str,
    like: bool,
    confirm: Callable[[RemovalPreview], str],
) -> List[EventFilterRecord]:
    """
    Find the filters named name (or containing it, with like) in namespace,
    ask confirm, and delete them if the answer is exactly "Y".

    confirm gets the preview and returns whatever the operator typed.
    Returns the deleted records; an empty list when nothing matched.
    Raises RemovalDeclined for any other answer.
    """
    preview = preview_removal(connector, namespace, name, like)
    if not preview.matches:
        logger.warning(
            f"No event filter {'containing' if like else 'named'} '{name}' found in {namespace}. "
            "Check the spelling of the filter name and namespace."
        )
        return []

    response = confirm(preview)
    if response != CONFIRM_TOKEN:
        raise RemovalDeclined(preview, response)

    return delete_matches(preview)
