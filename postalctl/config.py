"""Config reader: pull single scalar values out of postal.yml."""

import logging
import os

import yaml

from postalctl.errors import ConfigParseError

logger = logging.getLogger(__name__)


class _Absent:
    """Sentinel for a key that is not set."""

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False


ABSENT = _Absent()


def _split_query(query):
    """Split a yq-style path (``.worker.replicas``) into its keys."""
    return [part for part in query.strip().split(".") if part]


def lookup(document, query):
    """Walk *document* along *query*; return ABSENT when any step is missing."""
    node = document
    for key in _split_query(query):
        if isinstance(node, dict) and key in node:
            node = node[key]
        elif isinstance(node, list) and key.isdigit() and int(key) < len(node):
            node = node[int(key)]
        else:
            return ABSENT
    # yq prints an explicit null the same way as a missing key
    if node is None:
        return ABSENT
    return node


def read_config_value(path, query):
    """Return the value at *query* in the YAML file at *path*, or ABSENT.

    A missing file counts as "not configured" rather than an error, the
    same as a missing key.

    Raises:
        ConfigParseError: the file exists but is not valid YAML, or the
            value at *query* is a mapping or list rather than a scalar.
    """
    if not os.path.isfile(path):
        logger.debug(f"Config file {path} not found; treating {query} as unset")
        return ABSENT

    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Error parsing YAML config {path}: {e}") from e

    value = lookup(document, query)
    if isinstance(value, (dict, list)):
        raise ConfigParseError(f"Expected a single value for {query} in {path}, got {type(value).__name__}")
    return value
