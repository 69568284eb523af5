# -*- encoding: utf-8 -*-
# @File   : writer.py
# @Time   : 2024/10/13 00:12:36

from typing import Iterator

from .codec import format_value
from .consts import COMMENT_MARK, LineKind
from .model import IniDocument, IniFormat, IniLine


class IniConsistencyError(Exception):
    """Section order and section data of an `IniDocument` disagree.

    A bug rather than bad input: all public mutations keep both in sync.
    """
    pass


def format_line(line: IniLine, separator: str = '=') -> str:
    match line.kind:
        case LineKind.COMMENT:
            return f'{COMMENT_MARK}{line.comment or ""}'
        case LineKind.SECTION:
            ret = f'[{line.section}]'
        case LineKind.KEY_VALUE:
            ret = (f'{line.key}{separator}'
                   f'{format_value(line.value, line.array, line.quote)}')
        case _:
            return ''
    if line.comment:
        ret += f' {COMMENT_MARK}{line.comment}'
    return ret


def _needs_blank(fmt: IniFormat, prev: LineKind, cur: LineKind) -> bool:
    if prev == LineKind.KEY_VALUE:
        if cur == LineKind.SECTION:
            return fmt.blank_between_sections
        if cur == LineKind.COMMENT:
            return fmt.blank_above_comments
    return fmt.blank_between_pairs and cur == LineKind.KEY_VALUE and prev in (
        LineKind.KEY_VALUE, LineKind.SECTION)


def iter_lines(
    doc: IniDocument, fmt: IniFormat | None = None
) -> Iterator[str]:
    """Yield the text lines of `doc`, without line endings.

    Each call starts over, so the result may be consumed once per call.
    """
    if fmt is None:
        fmt = doc.fmt
    prev = LineKind.NONE
    for folded, lines in doc._structure():
        if lines is None:
            raise IniConsistencyError(
                f'section "{folded}" is ordered but holds no data.')
        for line in lines:
            if _needs_blank(fmt, prev, line.kind):
                yield ''
            yield format_line(line, fmt.output_separator)
            prev = line.kind


def dumps(doc: IniDocument, fmt: IniFormat | None = None) -> str:
    return ''.join(f'{i}\n' for i in iter_lines(doc, fmt))
