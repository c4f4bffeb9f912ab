from __future__ import annotations

"""Text cleaning for resolved cell values.

Some export tools wrap cell text in quotes ('Mary Wanjiku' or "0722...").
clean() removes that wrapping together with surrounding whitespace.
"""

__all__ = ["clean"]

_QUOTES = "'\""


def clean(value: str) -> str:
    """Strip surrounding whitespace and wrapping quotes.

    Quotes and whitespace are removed from both ends until neither end
    starts or finishes with one, so ``clean(clean(x)) == clean(x)``.

    >>> clean("  'Mary Wanjiku' ")
    'Mary Wanjiku'
    >>> clean('"a@b.com"')
    'a@b.com'
    """
    text = value.strip()
    while text and (text[0] in _QUOTES or text[-1] in _QUOTES):
        if text[0] in _QUOTES:
            text = text[1:]
        if text and text[-1] in _QUOTES:
            text = text[:-1]
        text = text.strip()
    return text
