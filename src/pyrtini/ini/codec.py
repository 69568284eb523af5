# -*- encoding: utf-8 -*-
# @File   : codec.py
# @Time   : 2024/10/12 22:03:51

"""Value region codec.

Everything right of the key/value separator goes through `parse_value()`,
which decides between a plain scalar, a quoted scalar and a CSV array,
and peels off the trailing `; inline comment`.

Quoting rules, roughly:

    ```ini
    plain = some text      ; -> scalar 'some text'
    csv = 1, 2,3           ; -> array ['1', '2', '3']
    one = 1                ; -> scalar '1' (a single token is never an array)
    quoted = "a, b; c"     ; -> scalar 'a, b; c', quote '"'
    ```

The parser never raises. Broken quoting just degrades to unquoted text.
"""

from typing import NamedTuple, Sequence

from .consts import (
    ARRAY_DELIMITER,
    ARRAY_JOINER,
    COMMENT_MARK,
    ESCAPE_MARK,
    QUOTE_MARKS
)


class ParsedValue(NamedTuple):
    """Only for passing codec results around."""
    value: str | None
    array: list[str] | None
    comment: str | None
    quote: str | None


def split_csv(text: str) -> list[str] | None:
    """Split `text` into trimmed CSV tokens.

    Returns `None` unless there are at least two tokens.
    """
    if ARRAY_DELIMITER not in text:
        return None
    tokens = [i.strip() for i in text.split(ARRAY_DELIMITER)]
    return tokens if len(tokens) > 1 else None


def _find_comment(text: str) -> int:
    idx = text.find(COMMENT_MARK)
    while idx > 0 and text[idx - 1] == ESCAPE_MARK:
        idx = text.find(COMMENT_MARK, idx + 1)
    return idx


def _detect_quote(text: str) -> str | None:
    # a quote that opens the value wins, otherwise `"` goes before `'`.
    if text[:1] in QUOTE_MARKS and text.count(text[0]) >= 2:
        return text[0]
    # quotes inside the inline comment don't count.
    if (idx := _find_comment(text)) != -1:
        text = text[:idx]
    for mark in QUOTE_MARKS:
        if text.count(mark) >= 2:
            return mark
    return None


def _trailing_comment(text: str) -> str | None:
    text = text.lstrip()
    if text.startswith(COMMENT_MARK) and len(text) > 1:
        return text[1:]
    return None


def parse_value(text: str, start: int = 0) -> ParsedValue:
    text = text[start:].lstrip()
    if not text:
        return ParsedValue('', None, None, None)

    if (quote := _detect_quote(text)) is not None:
        opening = text.index(quote)
        closing = text.index(quote, opening + 1)
        return ParsedValue(
            text[opening + 1:closing],
            None,
            _trailing_comment(text[closing + 1:]),
            quote)

    comment = None
    if (idx := _find_comment(text)) != -1:
        # `key = val ;` keeps no (empty) comment.
        comment = text[idx + 1:] or None
        text = text[:idx]
    value = text.strip()

    if (array := split_csv(value)) is not None:
        return ParsedValue(None, array, comment, None)
    return ParsedValue(value, None, comment, None)


def format_value(
    value: str | None,
    array: Sequence[str] | None = None,
    quote: str | None = None
) -> str:
    """Inverse of `parse_value()`, without the comment."""
    ret = ARRAY_JOINER.join(array) if array is not None else (value or '')
    if quote:
        ret = f'{quote}{ret}{quote}'
    return ret
