"""Callable contracts shared by the reconciliation stages.

Every piece of caller-supplied behaviour (filtering, mapping, key selection,
actions) is a plain callable. Records are generic: ``R`` is the raw record type
handed in by a data source, ``P`` the projected record type after mapping.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

type RecordPredicate[R] = Callable[[R], bool]
type RecordMapper[R, P] = Callable[[R], P]
type KeySelector[P] = str | Callable[[P], object]
type DeltaAction[P] = Callable[[Sequence[P]], object]
type KeyedCollection[P] = dict[str, P]
