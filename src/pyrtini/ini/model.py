# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:41:08

"""
Round-trip INI structure: every line read is kept as an `IniLine` record,
comments included, so that writing back loses nothing but blank lines.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from re import ASCII
from re import compile as regex
from typing import Iterable, Iterator

from .codec import ParsedValue, parse_value
from .consts import DEFAULT_SECTION, DEFAULT_SECTION_FOLDED, LineKind


@dataclass(kw_only=True)
class IniFormat:
    """Separators and blank line cosmetics, shared by reading and writing."""
    input_separator: str = '='
    output_separator: str = '='
    # blank line before `[section]` following a key-value pair.
    blank_between_sections: bool = True
    # blank line before `;comment` following a key-value pair.
    blank_above_comments: bool = True
    # blank line between pairs, and between a header and its first pair.
    blank_between_pairs: bool = False


@dataclass(kw_only=True)
class IniLine:
    """A single line of INI text.

    For `LineKind.KEY_VALUE` exactly one of `value` and `array` is set.
    """
    kind: LineKind = LineKind.NONE
    section: str = DEFAULT_SECTION
    key: str = ''
    comment: str | None = None
    quote: str | None = None
    value: str | None = None
    array: list[str] | None = None
    folded_key: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.folded_key = self.key.lower()

    @classmethod
    def pair(cls, section: str, key: str, parsed: ParsedValue) -> 'IniLine':
        return cls(
            kind=LineKind.KEY_VALUE,
            section=section,
            key=key,
            comment=parsed.comment,
            quote=parsed.quote,
            value=parsed.value,
            array=parsed.array)


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


# plain ASCII decimals only: no `1_000`, no full-width digits, no `inf`.
_INT_LITERAL = regex(r'[+-]?\d+', ASCII)
_FLOAT_LITERAL = regex(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?', ASCII)


def _parse_int(text: str) -> int:
    if not _INT_LITERAL.fullmatch(text := text.strip()):
        raise ValueError(f'invalid literal for int: {text!r}')
    return int(text)


def _parse_float(text: str) -> float:
    if not _FLOAT_LITERAL.fullmatch(text := text.strip()):
        raise ValueError(f'invalid literal for float: {text!r}')
    return float(text)


def _parse_bool(text: str) -> bool:
    match text.strip().lower():
        case 'true':
            return True
        case 'false':
            return False
    raise ValueError(f'invalid literal for bool: {text!r}')


class IniDocument:
    """INI 文档。按小节保存每一行（含注释），保证读写往返不丢内容。

    小节名与键名均不区分大小写：

        ```python
        doc = IniDocument()
        doc.set('Case', 'My', 'suit')
        doc['case', 'my']  # 'suit'
        ```

    另注：`self.sections()`的顺序即写出时的小节顺序，
    它与内部字典的迭代顺序无关。
    """
    def __init__(self, fmt: IniFormat | None = None) -> None:
        self.fmt = fmt if fmt is not None else IniFormat()
        # lowered section name -> lines, in file order.
        self.__sections: dict[str, list[IniLine]] = {}
        # lowered section names, in output order.
        self.__order: list[str] = []

    def __getitem__(self, item: str | tuple[str, str]) -> str | None:
        """`doc[key]` or `doc[key, section]`. Raw scalar, may be `''`."""
        key, section = self.__unpack(item)
        line = self.__find(key, section)
        return None if line is None else line.value

    def __setitem__(self, item: str | tuple[str, str], value: object) -> None:
        key, section = self.__unpack(item)
        self.set(key, section, value)

    def __delitem__(self, item: str | tuple[str, str]) -> None:
        key, section = self.__unpack(item)
        if not self.delete(key, section):
            raise KeyError(item)

    def __len__(self) -> int:
        return len(self.__order)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections())

    def __str__(self) -> str:
        from .writer import dumps
        return dumps(self)

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d }' % len(self)

    @staticmethod
    def __unpack(item: str | tuple[str, str]) -> tuple[str, str]:
        if isinstance(item, tuple):
            return item
        return item, DEFAULT_SECTION

    def __locate(self, key: str, section: str) -> tuple[list[IniLine], int]:
        lines = self.__sections.get(section.lower())
        if lines is None:
            return [], -1
        key = key.lower()
        for idx, line in enumerate(lines):
            if line.kind == LineKind.KEY_VALUE and line.folded_key == key:
                return lines, idx
        return lines, -1

    def __find(self, key: str, section: str) -> IniLine | None:
        lines, idx = self.__locate(key, section)
        return None if idx == -1 else lines[idx]

    def _append(self, line: IniLine) -> None:
        """Add a line at the end of its section. For parsing."""
        folded = line.section.lower()
        if line.kind == LineKind.SECTION or folded == DEFAULT_SECTION_FOLDED:
            if folded not in self.__order:
                self.__order.append(folded)
        lines = self.__sections.setdefault(folded, [])
        if line.kind == LineKind.SECTION and any(
            i.kind == LineKind.SECTION for i in lines
        ):
            return  # section declared twice, keep the first header.
        lines.append(line)

    def _structure(self) -> Iterator[tuple[str, list[IniLine] | None]]:
        """Output order of sections. For the writer."""
        for folded in self.__order:
            yield folded, self.__sections.get(folded)

    def _place_default_header(self) -> None:
        """Move a late `[default]` header right above the first pair.

        Comments before the very first key would otherwise be stuck
        above the header of the section they describe.
        """
        lines = self.__sections.get(DEFAULT_SECTION_FOLDED)
        if not lines or len(lines) < 2 or lines[0].kind == LineKind.SECTION:
            return
        headers = [
            idx for idx, line in enumerate(lines)
            if line.kind == LineKind.SECTION
        ]
        if not headers:
            return
        header = lines.pop(headers[-1])
        for idx, line in enumerate(lines):
            if line.kind not in (LineKind.COMMENT, LineKind.SECTION):
                lines.insert(idx, header)
                return
        lines.append(header)

    def __discard(self, folded: str) -> None:
        del self.__sections[folded]
        if folded in self.__order:
            self.__order.remove(folded)

    def __put(self, key: str, section: str, parsed: ParsedValue) -> None:
        lines, idx = self.__locate(key, section)
        if idx != -1:
            # same slot, new payload, old comment.
            line = IniLine.pair(lines[idx].section, lines[idx].key, parsed)
            line.comment = lines[idx].comment
            lines[idx] = line
            return
        if section.lower() not in self.__sections:
            self._append(IniLine(kind=LineKind.SECTION, section=section))
        self._append(IniLine.pair(section, key, parsed))

    def sections(self) -> list[str]:
        """Section names in output order, with their original case."""
        ret = []
        for folded, lines in self._structure():
            name = lines[0].section if lines else folded
            for i in lines or ():
                if i.kind == LineKind.SECTION:
                    name = i.section
                    break
            ret.append(name)
        return ret

    def has_section(self, section: str) -> bool:
        return section.lower() in self.__sections

    def has_key(self, key: str, section: str = DEFAULT_SECTION) -> bool:
        return self.__find(key, section) is not None

    def keys(self, section: str = DEFAULT_SECTION) -> list[str]:
        return [
            i.key for i in self.__sections.get(section.lower(), ())
            if i.kind == LineKind.KEY_VALUE
        ]

    def lines(self, section: str = DEFAULT_SECTION) -> list[IniLine]:
        """A copy of the records of `section`, comments included.

        Editing the copies doesn't touch the document, use `set()` and co.
        """
        return deepcopy(self.__sections.get(section.lower(), []))

    def get(
        self, key: str, section: str = DEFAULT_SECTION,
        default: str | None = None
    ) -> str | None:
        """Scalar value of `key`.

        `default` if the key is missing, empty or holds an array.
        """
        line = self.__find(key, section)
        if line is None or not line.value:
            return default
        return line.value

    def get_int(
        self, key: str, section: str = DEFAULT_SECTION,
        default: int | None = None
    ) -> int | None:
        if (text := self.get(key, section)) is None:
            return default
        try:
            return _parse_int(text)
        except ValueError:
            return default

    def get_float(
        self, key: str, section: str = DEFAULT_SECTION,
        default: float = float('nan')
    ) -> float:
        if (text := self.get(key, section)) is None:
            return default
        try:
            return _parse_float(text)
        except ValueError:
            return default

    def get_bool(
        self, key: str, section: str = DEFAULT_SECTION,
        default: bool = False
    ) -> bool:
        if (text := self.get(key, section)) is None:
            return default
        try:
            return _parse_bool(text)
        except ValueError:
            return default

    def set(self, key: str, section: str, value: object) -> None:
        """Set `key` under `section`, creating either if needed.

        Whether the value ends up a scalar or an array is decided again
        on every call, from the text of `value` alone.
        """
        self.__put(key, section, parse_value(_stringify(value)))

    def delete(self, key: str, section: str = DEFAULT_SECTION) -> bool:
        """Remove `key` from `section`.

        A section left without any pair is dropped as a whole,
        header and comments included.

        Returns:
            `True` if the key was found, otherwise `False`.
        """
        lines, idx = self.__locate(key, section)
        if idx == -1:
            return False
        del lines[idx]
        if not any(i.kind == LineKind.KEY_VALUE for i in lines):
            self.__discard(section.lower())
        return True

    def delete_section(self, section: str) -> bool:
        if section.lower() not in self.__sections:
            return False
        self.__discard(section.lower())
        return True

    def get_array(
        self, key: str, section: str = DEFAULT_SECTION
    ) -> list[str] | None:
        """CSV array of `key`, or `None` if it holds a scalar.

        The list is the one stored in the document, edits to its
        elements show up when writing.
        """
        line = self.__find(key, section)
        return None if line is None else line.array

    # unlike the scalar getters, these raise `ValueError` on bad elements.
    def get_int_array(
        self, key: str, section: str = DEFAULT_SECTION
    ) -> list[int] | None:
        if (arr := self.get_array(key, section)) is None:
            return None
        return [_parse_int(i) for i in arr]

    def get_float_array(
        self, key: str, section: str = DEFAULT_SECTION
    ) -> list[float] | None:
        if (arr := self.get_array(key, section)) is None:
            return None
        return [_parse_float(i) for i in arr]

    def get_bool_array(
        self, key: str, section: str = DEFAULT_SECTION
    ) -> list[bool] | None:
        if (arr := self.get_array(key, section)) is None:
            return None
        return [_parse_bool(i) for i in arr]

    def set_array(
        self, key: str, section: str, values: Iterable[object]
    ) -> None:
        """Store `values` as an array, even a single element one.

        Elements are written as they are: one holding `,` splits
        into several when the text is read back.

        Raises:
            `ValueError` if `values` is empty.
        """
        arr = [_stringify(i) for i in values]
        if not arr:
            raise ValueError(f'empty array for "{key}" in [{section}].')
        self.__put(key, section, ParsedValue(None, arr, None, None))
