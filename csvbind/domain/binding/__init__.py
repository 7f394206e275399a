from .coerce import parse_float, parse_int, parse_uint, str_to_int64
from .decoder import ReadIter
from .planner import build_plan, classify, find_column, lookup_key

__all__ = [
    "ReadIter",
    "build_plan",
    "classify",
    "find_column",
    "lookup_key",
    "parse_int",
    "parse_uint",
    "parse_float",
    "str_to_int64",
]
