"""
Bounded, composable rendering of arbitrary values to text.

The show protocol renders a value into a shared output buffer while decrementing a shared
character budget, and reports whether the value was rendered completely. Containers recurse
back into the protocol for every element, so one budget governs the whole nested structure.

Truncation is element-level: a scalar is either appended in full or not at all, so the output may
overrun the nominal budget by up to one element. A truncated container shows a single "..." marker
before its closing delimiter.

Examples:
    >>> render_bounded([1, 2, 3])
    '[ 0:1, 1:2, 2:3 ]'
    >>> render_bounded(list(range(100)), "L20")
    '[ 0:0, 1:1, 2:2, 3:... ]'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import logging
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .shapes import classify
from .utils import class_name, safe_str

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 80
UNBOUNDED = sys.maxsize

ELLIPSIS = "..."
SEPARATOR = ", "
PAIR_SEPARATOR = " => "

_LENGTH_DIRECTIVE = re.compile(r"L(\d+)")


# Classes --------------------------------------------------------------------------------------------------------------

class InvalidFormatError(ValueError):
    """Raised when a maximum length directive like "L80" is malformed."""


@dataclass
class Budget:
    """
    Remaining character allowance of one render call, shared by every nested show() call.

    The budget may go negative; zero or less means nothing more fits.
    """

    rest: int

    @property
    def exhausted(self) -> bool:
        return self.rest <= 0

    def charge(self, n: int) -> None:
        self.rest -= n


@runtime_checkable
class Showable(Protocol):
    """Protocol for values that render themselves with budget awareness."""

    def __show__(self, out: io.StringIO, budget: Budget, provider: Any = None) -> bool: ...


@runtime_checkable
class FormatProvider(Protocol):
    """Protocol for culture or application specific scalar formatting."""

    def format_value(self, obj: Any) -> str: ...


class FormatSpecProvider:
    """
    Format scalars with Python format specs selected by value type.

    An exact type match wins over an isinstance() match, so bool can be told apart from int.
    Values of unlisted types are formatted with str().

    Examples:
        >>> provider = FormatSpecProvider({float: ".2f", int: ","})
        >>> render_bounded([3.14159, 1234567], provider=provider)
        '[ 0:3.14, 1:1,234,567 ]'
    """

    def __init__(self, specs: Mapping[type, str]) -> None:
        self._specs = dict(specs)

    def format_value(self, obj: Any) -> str:
        spec = self._specs.get(type(obj))
        if spec is None:
            for tp, candidate in self._specs.items():
                if isinstance(obj, tp):
                    spec = candidate
                    break
        if spec is None:
            return safe_str(obj)
        return format(obj, spec)

    def __repr__(self) -> str:
        return f"FormatSpecProvider({self._specs!r})"


class ShowableMixin(ABC):
    """
    Base for user types implementing __show__.

    Supplies str() with the default length cap and format() support for maximum length directives,
    so f"{obj:L20}" renders at most about 20 characters.
    """

    @abstractmethod
    def __show__(self, out: io.StringIO, budget: Budget, provider: Any = None) -> bool: ...

    def __format__(self, format_spec: str) -> str:
        return show_string(self, format_spec or None)

    def __str__(self) -> str:
        return show_string(self)


# Methods --------------------------------------------------------------------------------------------------------------


def show(obj: Any, out: io.StringIO, budget: Budget, provider: Any = None) -> bool:
    """
    Append obj to out, charging the appended length to budget.

    Dispatch order:
        - Exhausted budget: append nothing and return False
        - Showable: delegate to obj.__show__()
        - Recognised container: delegate to the collection or dictionary renderer
        - Anything else: format_scalar(), always complete

    Args:
        obj: Any value.
        out: Output buffer, append-only.
        budget: Shared remaining budget, decremented by the number of characters appended.
        provider: Optional FormatProvider, forwarded unchanged to scalar formatting.

    Returns:
        True if obj was rendered completely.
    """
    if budget.exhausted:
        return False
    if isinstance(obj, Showable) and not isinstance(obj, type):
        return obj.__show__(out, budget, provider)

    shape = classify(obj)
    if shape is not None:
        from .rendering import show_collection, show_dictionary

        if shape.is_dictionary:
            return show_dictionary(obj, out, budget, provider)
        return show_collection(obj, out, budget, provider)

    write(out, format_scalar(obj, provider), budget)
    return True


def show_pair(
    key: Any,
    value: Any,
    out: io.StringIO,
    budget: Budget,
    provider: Any = None,
    separator: str = PAIR_SEPARATOR,
) -> bool:
    """
    Show a key-value pair as "key => value".

    The separator is appended only after a completely shown key. Returns True if both parts
    were shown completely.
    """
    if not show(key, out, budget, provider):
        return False
    write(out, separator, budget)
    return show(value, out, budget, provider)


def format_scalar(obj: Any, provider: Any = None) -> str:
    """
    Format a value without budget awareness.

    The provider is opaque: one that is not a FormatProvider is ignored and str() is used.
    """
    if isinstance(provider, FormatProvider):
        return provider.format_value(obj)
    return safe_str(obj)


def parse_max_length(fmt: str | None, *, default_max_length: int = DEFAULT_MAX_LENGTH) -> int:
    """
    Parse a maximum length directive.

    Directive forms:
        - None or "": default_max_length
        - "L<digits>": that many characters, e.g. "L300"
        - Anything else, including bare "L": unbounded

    Raises:
        InvalidFormatError: If the directive starts with "L" followed by non-digits.

    Examples:
        >>> parse_max_length("L300")
        300
        >>> parse_max_length("g") == UNBOUNDED
        True
    """
    if not fmt:
        return default_max_length
    if len(fmt) > 1 and fmt.startswith("L"):
        match = _LENGTH_DIRECTIVE.fullmatch(fmt)
        if match is None:
            raise InvalidFormatError(f"invalid maximum length directive {fmt!r}, expected 'L<digits>'")
        return int(match.group(1))
    return UNBOUNDED


def render_bounded(
    value: Any,
    fmt: str | None = None,
    provider: Any = None,
    *,
    default_max_length: int = DEFAULT_MAX_LENGTH,
) -> str:
    """
    Render any value to a string of approximately bounded length.

    Truncation is signalled only by "..." markers embedded in the result.

    Args:
        value: Scalar, Showable or container.
        fmt: Maximum length directive, see parse_max_length().
        provider: Optional FormatProvider for scalars.
        default_max_length: Budget used when fmt is None or empty.

    Raises:
        InvalidFormatError: If fmt is malformed.
    """
    budget = Budget(parse_max_length(fmt, default_max_length=default_max_length))
    out = io.StringIO()
    if not show(value, out, budget, provider):
        logger.debug("Truncated %s rendering, remaining budget %d", class_name(value), budget.rest)
    return out.getvalue()


def show_string(showable: Showable, fmt: str | None = None, provider: Any = None) -> str:
    """
    Render a Showable with a maximum length directive.

    Unlike render_bounded() the outermost value is asked to show itself even for a zero budget,
    so containers still render their delimiters.
    """
    budget = Budget(parse_max_length(fmt))
    out = io.StringIO()
    showable.__show__(out, budget, provider)
    return out.getvalue()


def write(out: io.StringIO, text: str, budget: Budget) -> None:
    """Append text to out and charge its length to budget."""
    out.write(text)
    budget.charge(len(text))
