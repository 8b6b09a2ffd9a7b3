"""
Boundshow Collections

Read-only views that declare rendering capabilities for existing containers.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import io
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import Any, TypeVar, Generic

# Local ----------------------------------------------------------------------------------------------------------------
from .rendering import show_collection, show_dictionary
from .shapes import Speed
from .showing import Budget, ShowableMixin
from .utils import class_name

# Classes --------------------------------------------------------------------------------------------------------------

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class CollectionView(ShowableMixin, Generic[T]):
    """
    A read-only view declaring collection capabilities for any re-iterable container.

    - allows_duplicates: elements may repeat, shown as a bag "{{ ... }}".
    - duplicates_by_counting: duplicates are reported as counts "a(*2)" rather than repeated.
    - indexing_speed: Speed.CONSTANT turns on index prefixes "[ 0:a, ... ]".

    Without flags the view is shown as a set "{ ... }".

    Examples:
        >>> str(CollectionView(["x", "x", "y"], allows_duplicates=True))
        '{{ x, x, y }}'
        >>> str(CollectionView(["x", "x", "y"], allows_duplicates=True, duplicates_by_counting=True))
        '{{ x(*2), y(*1) }}'
    """

    def __init__(
        self,
        items: Iterable[T],
        *,
        allows_duplicates: bool = False,
        duplicates_by_counting: bool = False,
        indexing_speed: Speed | str = Speed.LINEAR,
    ) -> None:
        if isinstance(items, Iterator):
            raise TypeError(f"items must be re-iterable, got one-shot {class_name(items)}")
        if duplicates_by_counting and not allows_duplicates:
            raise ValueError("duplicates_by_counting requires allows_duplicates")
        self._items = items
        self.allows_duplicates = allows_duplicates
        self.duplicates_by_counting = duplicates_by_counting
        self.indexing_speed = Speed(indexing_speed)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return sum(1 for _ in self._items)

    def item_multiplicities(self) -> Iterator[tuple[T, int]]:
        """Distinct elements with their counts, in order of first occurrence."""
        return iter(collections.Counter(self._items).items())

    def __show__(self, out: io.StringIO, budget: Budget, provider: Any = None) -> bool:
        return show_collection(self, out, budget, provider)

    def __repr__(self) -> str:
        return (
            f"CollectionView({self._items!r}, allows_duplicates={self.allows_duplicates}, "
            f"duplicates_by_counting={self.duplicates_by_counting}, indexing_speed={self.indexing_speed!r})"
        )


class DictionaryView(ShowableMixin, Mapping[K, V], Generic[K, V]):
    """
    A read-only Mapping view over a dictionary, optionally ordered by key.

    - key_ordered=False iterates in the underlying mapping's order and is shown as "{ k => v }".
    - key_ordered=True iterates in sorted key order and is shown as "[ k => v ]"; keys must be
      mutually comparable.

    Examples:
        >>> str(DictionaryView({"b": 2, "a": 1}, key_ordered=True))
        '[ a => 1, b => 2 ]'
    """

    def __init__(self, mapping: Mapping[K, V], *, key_ordered: bool = False) -> None:
        self._mapping = mapping
        self.key_ordered = key_ordered

    # ----- Mapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._mapping[key]

    def __iter__(self) -> Iterator[K]:
        if self.key_ordered:
            return iter(sorted(self._mapping))
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    # ----- Mapping helpers (typed views) -----

    def keys(self) -> KeysView[K]:
        return KeysView(self)

    def values(self) -> ValuesView[V]:
        return ValuesView(self)

    def items(self) -> ItemsView[K, V]:
        return ItemsView(self)

    # ----- Showing and representation -----

    def __show__(self, out: io.StringIO, budget: Budget, provider: Any = None) -> bool:
        return show_dictionary(self, out, budget, provider)

    def __repr__(self) -> str:
        return f"DictionaryView({self._mapping!r}, key_ordered={self.key_ordered})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None
