from typing import Iterator, List, Optional

from .common import getColoredLogger
from .connection import run_query
from .defaults import NAMESPACE_QUERY, NAMESPACE_SEPARATOR, ROOT_NAMESPACE

logger = getColoredLogger("filterhunt.namespaces")


def join_namespace(parent: str, child: str) -> str:
    return parent.rstrip(NAMESPACE_SEPARATOR) + NAMESPACE_SEPARATOR + child


def child_namespaces(connector, namespace: str) -> List[str]:
    '''
    Fully-qualified paths of the direct children of namespace. A namespace
    we can't query has no children as far as we're concerned.
    '''
    result = run_query(connector, namespace, NAMESPACE_QUERY)
    if not result.ok:
        logger.debug(f"Skipping namespace {namespace}: {result.error}")
        return []
    return [join_namespace(namespace, item.Name) for item in result.items]


def walk_namespaces(connector, namespace: str = ROOT_NAMESPACE, recurse: bool = True) -> Iterator[str]:
    """
    Yield every namespace below namespace (not namespace itself), depth
    first: a child comes out before its own children, and all of those
    before the next sibling.

    Uses an explicit stack of child iterators, so a deep tree doesn't
    touch the recursion limit. Each level is only queried once the walk
    gets there.
    """
    stack = [iter(child_namespaces(connector, namespace))]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        yield child
        if recurse:
            stack.append(iter(child_namespaces(connector, child)))


def namespaces_to_scan(connector, namespace: Optional[str] = None) -> Iterator[str]:
    """
    Namespaces the listing pass looks at: the requested namespace and
    everything below it, or everything below root when none was requested.
    """
    if namespace:
        yield namespace
        yield from walk_namespaces(connector, namespace)
    else:
        yield from walk_namespaces(connector, ROOT_NAMESPACE)
