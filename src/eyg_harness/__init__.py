"""Execution harness for code emitted by the EYG compiler."""

from .convert import entries, from_array, json_to_string, object_from_entries, to_array, to_host, to_list, to_value
from .equality import equal, structurally_equal
from .sandbox import Sandbox, run
from .types import ExecutionError, MarshalError, UNIT
from .values import EMPTY, FALSE, TRUE, head

__all__ = [
    "EMPTY",
    "ExecutionError",
    "FALSE",
    "MarshalError",
    "Sandbox",
    "TRUE",
    "UNIT",
    "entries",
    "equal",
    "from_array",
    "head",
    "json_to_string",
    "object_from_entries",
    "run",
    "structurally_equal",
    "to_array",
    "to_host",
    "to_list",
    "to_value",
]
