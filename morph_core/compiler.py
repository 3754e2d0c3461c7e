"""
YAML node-table compiler.

This module compiles a node table description into an ordered list of
`NodeRecord` objects. A record's index in the list is the node's identity;
its `column` and `row` drive the data-driven table layout, the remaining
fields are display data for the visual collaborator.

YAML schema (records form):

nodes:
  - symbol: I
    name: One
    detail: "1.00794"
    column: 1
    row: 1
  - symbol: II
    name: Two
    detail: "4.002602"
    column: 18
    row: 1

Flat form (five values per node: symbol, name, detail, column, row):

table: [I, One, "1.00794", 1, 1, II, Two, "4.002602", 18, 1]

Notes:
- `column` and `row` are required and must be numeric; they are never
  defaulted, so a typo cannot silently place a node at the origin.
- Unknown keys in the records form are preserved in `meta`.
- An empty table is rejected: the engine needs at least one node.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

import yaml

from .errors import LayoutConfigError

FLAT_STRIDE = 5

_RECORD_KEYS = ("symbol", "name", "detail", "column", "row")

# Ten-node demo table: symbol, name, detail, column, row
DEFAULT_TABLE: List[Any] = [
    "I", "One", "1.00794", 1, 1,
    "II", "Two", "4.002602", 18, 1,
    "III", "Three", "6.941", 1, 2,
    "IV", "Four", "9.012182", 2, 2,
    "V", "Five", "10.811", 13, 2,
    "VI", "Six", "12.0107", 14, 2,
    "VII", "Seven", "14.0067", 15, 2,
    "VIII", "Eight", "15.9994", 16, 2,
    "IX", "Nine", "18.9984032", 17, 2,
    "X", "Ten", "20.1797", 18, 2,
]


@dataclass(frozen=True)
class NodeRecord:
    """
    Per-node domain data.

    Attributes:
        symbol: Short label drawn large on the node
        name: Long label
        detail: Secondary text line
        column: Table column (drives x in the table layout)
        row: Table row (drives y in the table layout)
        meta: Extra keys carried through from the source table
    """

    symbol: str
    name: str
    detail: str
    column: float
    row: float
    meta: Dict[str, Any] = field(default_factory=dict)


def require_number(value: Any, key: str, index: int) -> float:
    """Return `value` as float or raise LayoutConfigError naming the node."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise LayoutConfigError(f"Node {index}: '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise LayoutConfigError(f"Node {index}: '{key}' must be finite, got {value!r}")
    return float(value)


def _record_from_mapping(entry: Mapping[str, Any], index: int) -> NodeRecord:
    for key in ("column", "row"):
        if key not in entry or entry[key] is None:
            raise LayoutConfigError(f"Node {index}: missing required attribute '{key}'")
    meta = {k: v for k, v in entry.items() if k not in _RECORD_KEYS}
    return NodeRecord(
        symbol=str(entry.get("symbol", index + 1)),
        name=str(entry.get("name", "")),
        detail=str(entry.get("detail", "")),
        column=require_number(entry["column"], "column", index),
        row=require_number(entry["row"], "row", index),
        meta=meta,
    )


def compile_flat_table(table: Sequence[Any]) -> List[NodeRecord]:
    """
    Compile the flat five-values-per-node table form.

    Args:
        table: Sequence of symbol, name, detail, column, row repeated per node

    Returns:
        List[NodeRecord]: One record per node, in table order
    """
    if len(table) % FLAT_STRIDE != 0:
        raise LayoutConfigError(
            f"Flat table length {len(table)} is not a multiple of {FLAT_STRIDE}"
        )
    records: List[NodeRecord] = []
    for i in range(0, len(table), FLAT_STRIDE):
        symbol, name, detail, column, row = table[i:i + FLAT_STRIDE]
        index = i // FLAT_STRIDE
        records.append(
            NodeRecord(
                symbol=str(symbol),
                name=str(name),
                detail=str(detail),
                column=require_number(column, "column", index),
                row=require_number(row, "row", index),
            )
        )
    return records


def compile_from_dict(spec: Mapping[str, Any]) -> List[NodeRecord]:
    """
    Compile a YAML-parsed dictionary into node records.

    Args:
        spec: Parsed YAML dictionary with either a `nodes` or a `table` key

    Returns:
        List[NodeRecord]: The compiled node table
    """
    if not isinstance(spec, Mapping):
        raise LayoutConfigError("Node table spec must be a mapping")

    if "nodes" in spec:
        entries = spec.get("nodes") or []
        records = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise LayoutConfigError(f"Node {index}: expected a mapping, got {type(entry).__name__}")
            records.append(_record_from_mapping(entry, index))
    elif "table" in spec:
        records = compile_flat_table(spec.get("table") or [])
    else:
        raise LayoutConfigError("Node table spec needs a 'nodes' or 'table' key")

    if not records:
        raise LayoutConfigError("Node table is empty; at least one node is required")
    return records


def compile_from_yaml(yaml_text: str) -> List[NodeRecord]:
    """Compile node records from YAML text."""
    spec = yaml.safe_load(yaml_text) or {}
    return compile_from_dict(spec)


def compile_from_file(path: str) -> List[NodeRecord]:
    """Compile node records from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return compile_from_yaml(f.read())


def default_table() -> List[NodeRecord]:
    """Return the bundled ten-node demo table."""
    return compile_flat_table(DEFAULT_TABLE)
