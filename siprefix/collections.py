"""
siprefix Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import Any, TypeVar, Generic

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_value

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")


class FrozenBiMap(Mapping[K, V], Generic[K, V]):
    """
    An immutable bidirectional map with Mapping-compatible API on the forward direction.

    - Forward direction (key -> value) implements the stdlib Mapping protocol:
      __getitem__, __iter__, __len__, keys(), values(), items(), get().
      Membership (x in bimap) applies to KEYS only, like dict.
    - Reverse direction (value -> key) available via get_key(value) and has_value(value).
    - Uniqueness of both keys and values is enforced once, at construction.
    - No mutation methods; instances are hashable and safe to share between threads.
    """

    __slots__ = ("_forward_map", "_backward_map")

    def __init__(self, initial: Mapping[K, V] | Iterable[tuple[K, V]] | None = None) -> None:
        forward: dict[K, V] = {}
        backward: dict[V, K] = {}
        iterable = initial.items() if isinstance(initial, Mapping) else (initial or ())
        for key, value in iterable:
            if key in forward:
                raise ValueError(f"Key {fmt_value(key)} already exists (maps to {forward[key]!r})")
            if value in backward:
                raise ValueError(f"Value {fmt_value(value)} already exists (mapped from {backward[value]!r})")
            forward[key] = value
            backward[value] = key
        self._forward_map: frozendict = frozendict(forward)
        self._backward_map: frozendict = frozendict(backward)

    # ----- Mapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._forward_map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    # ----- Mapping helpers (typed views) -----

    def keys(self) -> KeysView[K]:
        return self._forward_map.keys()

    def values(self) -> ValuesView[V]:
        return self._forward_map.values()

    def items(self) -> ItemsView[K, V]:
        return self._forward_map.items()

    def get(self, key: K, default: V | None = None) -> V | None:
        return self._forward_map.get(key, default)

    # ----- Bidirectional operations -----

    def get_key(self, value: V, default: K | None = None) -> K | None:
        """Lookup key by value, default if value is absent."""
        return self._backward_map.get(value, default)

    def has_value(self, value: V) -> bool:
        """True if value exists in reverse map."""
        return value in self._backward_map

    def inverse(self) -> "FrozenBiMap[V, K]":
        """New map with keys and values swapped."""
        return FrozenBiMap(self._backward_map.items())

    # ----- Equality, hashing and representation -----

    def __repr__(self) -> str:
        return f"FrozenBiMap({dict(self._forward_map)!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return dict(self._forward_map.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._forward_map)
