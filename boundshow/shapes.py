"""
Structural classification of containers for bounded rendering.

A container is never inspected by concrete type alone: its capabilities (does it allow duplicates,
does it count them, how fast is positional indexing, is it ordered by key) are collected into a
`Capabilities` record first, and the record alone selects a `ShapeInfo` with delimiters and
rendering modifiers.

Containers may declare capabilities explicitly through attributes:

    allows_duplicates: bool
    duplicates_by_counting: bool
    indexing_speed: Speed | str
    key_ordered: bool                   (dictionaries only)
    item_multiplicities() -> Iterable[tuple[element, count]]

Builtin containers are recognised without declarations:

    collections.Counter       -> bag with multiplicities
    Mapping                   -> unordered dictionary
    Sequence (non-text)       -> list with constant-time indexing
    Set                       -> set
    other Collection          -> bag, e.g. dict.values()
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import collections.abc as abc
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any, Iterable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, is_textual

_DECLARED_ATTRS = ("allows_duplicates", "duplicates_by_counting", "indexing_speed", "key_ordered")


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Speed(StrEnum):
    """
    Cost class of an operation on a container, used for positional indexing.

    Only CONSTANT indexing turns on index prefixes like "3:" when rendering.
    """
    CONSTANT = "constant"
    LOG = "log"
    LINEAR = "linear"
    POTENTIALLY_INFINITE = "potentially_infinite"


@unique
class Shape(StrEnum):
    """
    Structural shapes recognised by the collection renderer.

    Attributes:
        LIST: Constant-time indexed sequence, rendered as "[ 0:a, 1:b ]"
        SET: No duplicates, rendered as "{ a, b }"
        BAG: Duplicates stored by repetition, rendered as "{{ a, a, b }}"
        BAG_COUNTED: Duplicates tracked by count, rendered as "{{ a(*2), b(*1) }}"
        DICTIONARY: Unordered mapping, rendered as "{ k => v }"
        SORTED_DICTIONARY: Key-ordered mapping, rendered as "[ k => v ]"
    """
    LIST = "list"
    SET = "set"
    BAG = "bag"
    BAG_COUNTED = "bag_counted"
    DICTIONARY = "dictionary"
    SORTED_DICTIONARY = "sorted_dictionary"


@dataclass(frozen=True)
class Capabilities:
    """Capability flags of a container, as queried for shape selection."""

    allows_duplicates: bool = False
    duplicates_by_counting: bool = False
    indexing_speed: Speed = Speed.LINEAR
    key_ordered: bool = False
    is_dictionary: bool = False


@dataclass(frozen=True)
class ShapeInfo:
    """Delimiters and rendering modifiers for one shape."""

    shape: Shape
    open: str
    close: str
    show_indexes: bool = False
    show_multiplicities: bool = False

    @property
    def is_dictionary(self) -> bool:
        return self.shape in (Shape.DICTIONARY, Shape.SORTED_DICTIONARY)


_SHAPES = {
    Shape.LIST: ShapeInfo(Shape.LIST, "[ ", " ]", show_indexes=True),
    Shape.SET: ShapeInfo(Shape.SET, "{ ", " }"),
    Shape.BAG: ShapeInfo(Shape.BAG, "{{ ", " }}"),
    Shape.BAG_COUNTED: ShapeInfo(Shape.BAG_COUNTED, "{{ ", " }}", show_multiplicities=True),
    Shape.DICTIONARY: ShapeInfo(Shape.DICTIONARY, "{ ", " }"),
    Shape.SORTED_DICTIONARY: ShapeInfo(Shape.SORTED_DICTIONARY, "[ ", " ]"),
}


# Methods --------------------------------------------------------------------------------------------------------------


def capabilities_of(obj: Any) -> Capabilities | None:
    """
    Collect the capability flags of a container.

    Explicitly declared attributes take precedence over builtin inference. Text (str, bytes,
    bytearray) and non-containers return None and are rendered as scalars.

    Declared attributes count only when indexing_speed, if present, is a valid Speed; an iterable that
    merely shares an attribute name is a scalar.

    Examples:
        >>> capabilities_of([1, 2]).indexing_speed
        <Speed.CONSTANT: 'constant'>
        >>> capabilities_of("text") is None
        True
    """
    if obj is None or is_textual(obj):
        return None

    if any(hasattr(obj, attr) for attr in _DECLARED_ATTRS):
        speed = _declared_speed(obj)
        if speed is None or not isinstance(obj, abc.Iterable):
            return None
        return Capabilities(
            allows_duplicates=bool(getattr(obj, "allows_duplicates", False)),
            duplicates_by_counting=bool(getattr(obj, "duplicates_by_counting", False)),
            indexing_speed=speed,
            key_ordered=bool(getattr(obj, "key_ordered", False)),
            is_dictionary=isinstance(obj, abc.Mapping) or hasattr(obj, "key_ordered"),
        )

    # Counter is a Mapping, check it first
    if isinstance(obj, collections.Counter):
        return Capabilities(allows_duplicates=True, duplicates_by_counting=True)
    if isinstance(obj, abc.Mapping):
        return Capabilities(is_dictionary=True)
    if isinstance(obj, abc.Sequence):
        return Capabilities(allows_duplicates=True, indexing_speed=Speed.CONSTANT)
    if isinstance(obj, abc.Set):
        return Capabilities()
    # Other sized containers, e.g. dict.values()
    if isinstance(obj, abc.Collection):
        return Capabilities(allows_duplicates=True)
    return None


def classify(obj: Any) -> ShapeInfo | None:
    """
    Select the rendering shape of a container from its capabilities.

    Pure and computed on every call; nothing is cached on the container.

    Returns:
        ShapeInfo, or None when obj is not a recognised container.
    """
    caps = capabilities_of(obj)
    if caps is None:
        return None
    return shape_of(caps)


def shape_of(caps: Capabilities) -> ShapeInfo:
    """Map capability flags to a ShapeInfo, in order: dictionary, indexed list, bag, set."""
    if caps.is_dictionary:
        return _SHAPES[Shape.SORTED_DICTIONARY if caps.key_ordered else Shape.DICTIONARY]
    if caps.indexing_speed == Speed.CONSTANT:
        return _SHAPES[Shape.LIST]
    if caps.allows_duplicates:
        return _SHAPES[Shape.BAG_COUNTED if caps.duplicates_by_counting else Shape.BAG]
    return _SHAPES[Shape.SET]


def item_multiplicities(obj: Any) -> Iterator[tuple[Any, int]]:
    """
    Iterate (distinct element, count) pairs of a counting bag.

    Uses the container's own item_multiplicities() when declared; a Counter yields its items with
    a positive count, matching Counter.elements().

    Raises:
        TypeError: If obj provides no multiplicity view.
    """
    method = getattr(obj, "item_multiplicities", None)
    if callable(method):
        pairs: Iterable[tuple[Any, int]] = method()
        yield from pairs
    elif isinstance(obj, collections.Counter):
        yield from ((key, count) for key, count in obj.items() if count > 0)
    else:
        raise TypeError(f"{class_name(obj)} object provides no item multiplicities")


# Private Methods ------------------------------------------------------------------------------------------------------


def _declared_speed(obj: Any) -> Speed | None:
    """Declared indexing_speed as a Speed, LINEAR when undeclared, None when not a valid Speed."""
    try:
        return Speed(getattr(obj, "indexing_speed", Speed.LINEAR))
    except (ValueError, TypeError):
        return None
