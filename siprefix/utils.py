"""
siprefix Utilities shared across the package.

Message formatters for exception texts, kept here to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(x: Any) -> str:
    """
    Format the type of x (or x itself when it is a class) as "<type: name>".

    Examples:
        >>> fmt_type(10)
        '<type: int>'
        >>> fmt_type(str)
        '<type: str>'
    """
    cls = x if isinstance(x, type) else type(x)
    return f"<type: {cls.__name__}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    A ">" inside the repr is escaped so the closing angle bracket stays unambiguous.

    Args:
        x: Any Python object to format.
        max_repr: Maximum length of the value's repr before truncation.

    Returns:
        Formatted string like "<str: '2.5k'>".

    Examples:
        >>> fmt_value("1.2.3k")
        "<str: '1.2.3k'>"
        >>> fmt_value(42)
        '<int: 42>'
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    r = _fmt_truncate(base_repr.replace(">", "\\>"), max_repr)
    return f"<{t}: {r}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Truncate s to at most max_len characters before appending the ellipsis.

    Quoted reprs keep their quotes and get the ellipsis outside the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"

    return s[:max(1, max_len)] + ellipsis
