"""In-memory WMI repository for tests."""

import logging

import pytest

from filterhunt.connection import NamespaceUnavailable
from filterhunt.defaults import EVENT_FILTER_QUERY, NAMESPACE_QUERY


class FakeProperty:
    def __init__(self, name, value):
        self.Name = name
        self.Value = value


class FakeOleObject:
    def __init__(self, system, properties):
        self.SystemProperties_ = [FakeProperty(k, v) for k, v in system.items()]
        self.Properties_ = [FakeProperty(k, v) for k, v in properties.items()]


class FakeNamespaceInstance:
    def __init__(self, name):
        self.Name = name


class FakeFilter:
    def __init__(self, repo, namespace, name, query=None, event_namespace="root\\cimv2", fail_delete=False):
        self.repo = repo
        self.namespace = namespace
        self.Name = name
        self.EventNamespace = event_namespace
        self.Query = query or f"SELECT * FROM __InstanceCreationEvent WITHIN 5 WHERE TargetInstance ISA '{name}'"
        self.fail_delete = fail_delete
        relpath = f'__EventFilter.Name="{name}"'
        self.ole_object = FakeOleObject(
            {
                "__GENUS": 2,
                "__CLASS": "__EventFilter",
                "__SUPERCLASS": "__IndicationRelated",
                "__DERIVATION": ("__IndicationRelated", "__SystemClass"),
                "__SERVER": "WORKSTATION",
                "__NAMESPACE": namespace,
                "__RELPATH": relpath,
                "__PATH": f"\\\\WORKSTATION\\{namespace}:{relpath}",
            },
            {
                "CreatorSID": (1, 5, 0, 0, 0, 0, 0, 5, 32, 0, 0, 0),
                "EventAccess": None,
                "EventNamespace": self.EventNamespace,
                "Name": name,
                "Query": self.Query,
                "QueryLanguage": "WQL",
            },
        )

    def Delete_(self):
        if self.fail_delete:
            raise PermissionError(f"Access denied deleting {self.Name}")
        self.repo.deleted.append((self.namespace, self.Name))
        self.repo.filters[self.namespace].remove(self)


class FakeConnector:
    """
    Connector over a dict tree: {"A": {"filters": [...], "children": {...}}}.
    Namespaces listed in denied exist but refuse every query.
    """
    def __init__(self, tree=None, denied=()):
        self.children = {"root": []}
        self.filters = {"root": []}
        self.denied = set(denied)
        self.deleted = []
        self.queries = []
        self._build("root", tree or {})

    def _build(self, parent, tree):
        # Iterative so very deep trees can be built
        pending = [(parent, tree)]
        while pending:
            parent, tree = pending.pop()
            for name, node in tree.items():
                path = f"{parent}\\{name}"
                self.children[parent].append(name)
                self.children[path] = []
                self.filters[path] = []
                for filter_name in node.get("filters", []):
                    self.add_filter(path, filter_name)
                pending.append((path, node.get("children", {})))

    def add_filter(self, namespace, name, **kwargs):
        instance = FakeFilter(self, namespace, name, **kwargs)
        self.filters[namespace].append(instance)
        return instance

    def filter_names(self, namespace):
        return [f.Name for f in self.filters[namespace]]

    def query(self, namespace, wql):
        self.queries.append((namespace, wql))
        if namespace not in self.children or namespace in self.denied:
            raise NamespaceUnavailable(namespace, "Invalid namespace")
        if wql == NAMESPACE_QUERY:
            return [FakeNamespaceInstance(name) for name in self.children[namespace]]
        if wql == EVENT_FILTER_QUERY:
            return list(self.filters[namespace])
        raise AssertionError(f"unexpected query {wql}")


@pytest.fixture
def scenario():
    """root has A with Foo and Bar, and B with Baz."""
    return FakeConnector({
        "A": {"filters": ["Foo", "Bar"]},
        "B": {"filters": ["Baz"]},
    })


@pytest.fixture
def log_records():
    """Collect records logged on any filterhunt logger (they don't propagate)."""
    records = []

    class ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = ListHandler(level=logging.DEBUG)
    names = [
        name for name in logging.Logger.manager.loggerDict
        if name == "filterhunt" or name.startswith("filterhunt.")
    ]
    for name in names:
        logging.getLogger(name).addHandler(handler)
    yield records
    for name in names:
        logging.getLogger(name).removeHandler(handler)
