"""Delta stage: existence-based difference between two keyed collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .contracts import KeyedCollection


@dataclass(frozen=True, slots=True)
class Delta[P]:
    """Records to add to and remove from the target.

    Both mappings keep the insertion order of the collection the records came
    from. Keys present on both sides appear in neither.
    """

    adds_by_key: dict[str, P] = field(default_factory=dict)
    removes_by_key: dict[str, P] = field(default_factory=dict)

    @property
    def adds(self) -> list[P]:
        return list(self.adds_by_key.values())

    @property
    def removes(self) -> list[P]:
        return list(self.removes_by_key.values())

    @property
    def add_keys(self) -> list[str]:
        return list(self.adds_by_key)

    @property
    def remove_keys(self) -> list[str]:
        return list(self.removes_by_key)

    @property
    def is_empty(self) -> bool:
        return not self.adds_by_key and not self.removes_by_key


def compute_delta[P](source: KeyedCollection[P], target: KeyedCollection[P]) -> Delta[P]:
    """Return source-only records as adds and target-only records as removes."""

    adds_by_key = {key: record for key, record in source.items() if key not in target}
    removes_by_key = {key: record for key, record in target.items() if key not in source}
    return Delta(adds_by_key=adds_by_key, removes_by_key=removes_by_key)
