import logging
import re
import coloredlogs
import yaml


# Multi-line strings
# Event filter queries are often pasted in over several lines, so
# render those as a literal block instead of "line1\nline2"
def literal_presenter(dumper, data):
    # Multiline strings get |, single line strings get nothing fancy
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


yaml.SafeDumper.add_representer(str, literal_presenter)


def to_plain(value):
    '''
    Convert a value read off a WMI object into something safe_dump can
    represent. Anything unknown (COM dates, variants) is stringified.
    '''
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    return str(value)


def dump_yaml(data):
    return yaml.safe_dump(to_plain(data), sort_keys=False, allow_unicode=True)


# Matches namespace paths such as root\subscription or ROOT\CIMV2\ms_409
NAMESPACE_RE = re.compile(r"\b((?:root|ROOT|Root)(?=\\|\b)(?:\\[^\s\\'\":]+)*)")


class NamespaceHighlightingFormatter(coloredlogs.ColoredFormatter):
    def format(self, record):
        message = super().format(record)
        message = NAMESPACE_RE.sub(
            coloredlogs.ansi_wrap(r"\1", color="blue", bold=True), message
        )
        return message


def getColoredLogger(name):
    """
    Get or create a coloredlogger at INFO.
    """
    logger = logging.getLogger(name)
    level = logging.INFO

    formatter = NamespaceHighlightingFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
    )

    # Check if the logger already has handlers to prevent duplicate logs
    if not logger.handlers:
        handler = logging.StreamHandler()
        logger.setLevel(level)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # filterhunt.remover should not also log through filterhunt
    logger.propagate = False

    if not hasattr(logger, 'custom_set_level'):
        original_set_level = logger.setLevel

        def custom_set_level(level):
            # Call the original method, not the monkeypatched one
            original_set_level(level)
            for handler in logger.handlers:
                handler.setLevel(level)

        logger.custom_set_level = custom_set_level
        logger.setLevel = custom_set_level

    return logger


def set_log_level(level, prefix="filterhunt"):
    """
    Apply level to every logger created under prefix so far.
    """
    for name in list(logging.Logger.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(level)
