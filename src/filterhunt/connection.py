"""
WMI Connection
==============

Everything that touches the local WMI repository goes through here. The rest
of filterhunt only sees a *connector*: an object with a
``query(namespace, wql)`` method returning a list of WMI instances, raising
:class:`NamespaceUnavailable` when the namespace can't be reached.

:class:`WMIConnector` is the real connector, backed by the ``wmi`` package
(which in turn needs ``pywin32``). Tests swap in an in-memory one.

Query failures are never swallowed here. :func:`run_query` wraps them in a
:class:`QueryResult` so the caller decides, visibly, to skip a namespace.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .common import getColoredLogger

logger = getColoredLogger("filterhunt.connection")


class NamespaceUnavailable(Exception):
    """
    A namespace could not be opened or queried (missing, access denied, ...).
    """
    def __init__(self, namespace, reason):
        super().__init__(f"{namespace}: {reason}")
        self.namespace = namespace
        self.reason = reason


class WMIUnavailableError(RuntimeError):
    pass


@dataclass(frozen=True)
class QueryResult:
    namespace: str
    items: Tuple[Any, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WMIConnector:
    """
    Connector for the local machine. One ``wmi.WMI`` connection is opened per
    namespace, on first use, and kept for the rest of the run.
    """
    def __init__(self):
        self._wmi = None
        self._connections = {}

    def _module(self):
        if self._wmi is None:
            try:
                import wmi
            except ImportError as e:
                raise WMIUnavailableError(
                    f"The wmi package could not be loaded ({e}). filterhunt only runs on Windows with pywin32 installed."
                ) from e
            self._wmi = wmi
        return self._wmi

    def connect(self, namespace):
        wmi = self._module()
        if namespace not in self._connections:
            try:
                self._connections[namespace] = wmi.WMI(namespace=namespace)
            except wmi.x_wmi as e:
                raise NamespaceUnavailable(namespace, str(e)) from e
            logger.debug(f"Connected to {namespace}")
        return self._connections[namespace]

    def query(self, namespace, wql):
        wmi = self._module()
        conn = self.connect(namespace)
        try:
            return conn.query(wql)
        except wmi.x_wmi as e:
            raise NamespaceUnavailable(namespace, str(e)) from e


def run_query(connector, namespace, wql) -> QueryResult:
    """
    Run wql against namespace. A namespace we can't query yields a failed
    result instead of an exception.
    """
    try:
        items = connector.query(namespace, wql)
    except NamespaceUnavailable as e:
        return QueryResult(namespace, (), e.reason)
    return QueryResult(namespace, tuple(items))


def instance_properties(instance):
    """
    Every property of a WMI instance, system properties (__CLASS, __PATH, ...)
    first, exactly as WMI returned them.
    """
    ole = instance.ole_object
    record = {}
    for prop in ole.SystemProperties_:
        record[prop.Name] = prop.Value
    for prop in ole.Properties_:
        record[prop.Name] = prop.Value
    return record


def delete_instance(instance):
    # Errors (access denied, already gone) go straight to the caller
    instance.Delete_()
