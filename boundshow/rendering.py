"""
Bounded rendering of lists, sets, bags and dictionaries.

Both renderers share one element loop:

    - The combined length of both delimiters is charged once, before any element
    - ", " precedes every element but the first and costs 2
    - The loop stops as soon as the budget is exhausted at the top of an iteration
    - A truncated, non-empty container gets a single "..." before its closing delimiter
    - Delimiters are always appended in full so the text stays well-formed

An empty container renders its delimiters with a single space between, "[ ]" or "{{ }}", and is
always complete.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
from typing import Any, Callable, Iterable, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .shapes import Capabilities, ShapeInfo, classify, item_multiplicities, shape_of
from .showing import ELLIPSIS, SEPARATOR, Budget, show, show_pair, write


# Methods --------------------------------------------------------------------------------------------------------------


def show_collection(items: Iterable[Any] | None, out: io.StringIO, budget: Budget, provider: Any = None) -> bool:
    """
    Show a list, set or bag.

    Constant-time indexed sequences get index prefixes ("[ 0:a, 1:b ]"), bags that count their
    duplicates get multiplicity suffixes ("{{ a(*2) }}"). The multiplicity suffix is omitted for a
    truncated element. Unrecognised iterables are shown as sets.

    Returns:
        True if every element was shown completely; also True for None, which appends nothing.
    """
    if items is None:
        return True

    info = classify(items)
    if info is None or info.is_dictionary:
        info = shape_of(Capabilities())

    if info.show_multiplicities:

        def show_entry(index: int, entry: tuple[Any, int]) -> bool:
            key, count = entry
            if not show(key, out, budget, provider):
                return False
            write(out, f"(*{count})", budget)
            return True

        return _show_framed(item_multiplicities(items), show_entry, info, out, budget)

    def show_element(index: int, element: Any) -> bool:
        if info.show_indexes:
            write(out, f"{index}:", budget)
        return show(element, out, budget, provider)

    return _show_framed(items, show_element, info, out, budget)


def show_dictionary(
    dictionary: Mapping[Any, Any] | None, out: io.StringIO, budget: Budget, provider: Any = None
) -> bool:
    """
    Show a dictionary as "{ k => v, ... }", or "[ k => v, ... ]" when it is ordered by key.

    Each entry is shown through show_pair(), so both key and value recurse with budget awareness.
    """
    if dictionary is None:
        return True

    info = classify(dictionary)
    if info is None or not info.is_dictionary:
        info = shape_of(Capabilities(is_dictionary=True))

    def show_entry(index: int, entry: tuple[Any, Any]) -> bool:
        key, value = entry
        return show_pair(key, value, out, budget, provider)

    return _show_framed(dictionary.items(), show_entry, info, out, budget)


# Private Methods ------------------------------------------------------------------------------------------------------


def _show_framed(
    entries: Iterable[Any],
    show_entry: Callable[[int, Any], bool],
    info: ShapeInfo,
    out: io.StringIO,
    budget: Budget,
) -> bool:
    """Run the shared element loop between the delimiters of info."""
    out.write(info.open)
    budget.charge(len(info.open) + len(info.close))

    empty = True
    complete = True
    for index, entry in enumerate(entries):
        empty = False
        complete = False
        if budget.exhausted:
            break
        if index:
            write(out, SEPARATOR, budget)
        complete = show_entry(index, entry)

    if empty:
        out.write(info.close.lstrip())
        return True

    if not complete:
        write(out, ELLIPSIS, budget)
    out.write(info.close)
    return complete
