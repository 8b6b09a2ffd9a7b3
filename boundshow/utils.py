"""
Boundshow utilities shared across the package.

Contains helpers used by several modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Builtins are never qualified, so both `class_name(10)` and `class_name(int, True)` return 'int'.

    Examples:
        >>> class_name([1, 2])
        'list'
        >>> from collections import Counter
        >>> class_name(Counter, fully_qualified=True)
        'collections.Counter'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if fully_qualified and cls.__module__ != "builtins":
        return f"{cls.__module__}.{cls.__qualname__}"
    return cls.__name__


def safe_str(obj: Any) -> str:
    """
    Defensive str() call - a broken __str__ yields a placeholder token instead of raising
    """
    try:
        return str(obj)
    except Exception as e:
        return f"<{class_name(obj)} object (str failed: {class_name(e)})>"


def is_textual(obj: Any) -> bool:
    return isinstance(obj, (str, bytes, bytearray))
