# -----------------------------------------------------------------------------
# Copyright (c) 2026 influxstore contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Allow-lists for measurement names, tag keys and field keys.

An allow-list is parsed once from configuration. An empty allow-list
lets every name through.
"""

from typing import FrozenSet, Iterable, Union


def parse_allow_list(raw: Union[str, Iterable, None], upper: bool = False) -> FrozenSet[str]:
    """
    Parse a comma separated configuration value into a set of names.

    Args:
        raw: Comma separated string, or a list of names (YAML configs)
        upper: Upper-case every element (tag and field lists)

    Returns:
        Frozen set of trimmed, non-empty names
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        items = raw.split(',')
    else:
        items = [str(item) for item in raw]

    names = set()
    for item in items:
        item = item.strip()
        if not item:
            continue
        names.add(item.upper() if upper else item)
    return frozenset(names)


class AllowList:
    """
    Set of allowed names with an optional case fold.

    Measurement allow-lists match exactly; tag and field allow-lists are
    built with case_insensitive=True and compare upper-cased names.
    """

    def __init__(self, raw: Union[str, Iterable, None] = '', case_insensitive: bool = False):
        self.case_insensitive = case_insensitive
        self.names = parse_allow_list(raw, upper=case_insensitive)

    def allows(self, name: str) -> bool:
        if not self.names:
            return True
        key = name.upper() if self.case_insensitive else name
        return key in self.names

    def __bool__(self) -> bool:
        return bool(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AllowList):
            return NotImplemented
        return self.names == other.names and self.case_insensitive == other.case_insensitive

    def __hash__(self) -> int:
        return hash((self.names, self.case_insensitive))

    def __repr__(self) -> str:
        return f"AllowList({sorted(self.names)!r}, case_insensitive={self.case_insensitive})"
