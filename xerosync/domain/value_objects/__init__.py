"""Domain value objects."""

from .value_objects import ExecutionID
from .money import DEFAULT_DECIMALS, normalize, to_decimal

__all__ = [
    "ExecutionID",
    "DEFAULT_DECIMALS",
    "normalize",
    "to_decimal",
]
