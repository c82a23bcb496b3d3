# Default values for filterhunt: where the namespace walk starts, which WMI
# classes we ask for, and how a confirmation has to look.

# Namespace the walk starts from when none is given on the command line
ROOT_NAMESPACE = "root"

# WMI paths use backslashes. Kept as a constant so nobody fights escaping.
NAMESPACE_SEPARATOR = "\\"

# System class listing the children of a namespace
NAMESPACE_CLASS = "__NAMESPACE"
EVENT_FILTER_CLASS = "__EventFilter"

NAMESPACE_QUERY = f"SELECT * FROM {NAMESPACE_CLASS}"
EVENT_FILTER_QUERY = f"SELECT * FROM {EVENT_FILTER_CLASS}"

# Order of the columns in formatted output, and the WMI property each
# one is read from. Namespace is the namespace we queried, not a property.
RECORD_FIELDS = ("Namespace", "FilterName", "EventNamespace", "FilterQuery")
FILTER_PROPERTIES = {
    "FilterName": "Name",
    "EventNamespace": "EventNamespace",
    "FilterQuery": "Query",
}

# Operator has to type exactly this (case-sensitive) to delete anything
CONFIRM_TOKEN = "Y"
