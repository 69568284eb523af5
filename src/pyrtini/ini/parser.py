# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 00:47:22

"""Reading and writing round-trip INI files.

Lines are classified one by one, in a single pass:

    ```ini
    ; comment, kept under the section it appears in.
    [Section]  ; header, the inline comment is kept too.
    key = value, or, array  ; pair, see `ini.codec` for the value part.
    ```

Anything else (blank lines included) is dropped silently.
The only state carried between lines is the current section.
"""

import logging
from io import StringIO, TextIOBase
from os.path import exists, splitext
from shutil import copyfile
from typing import Iterable

import chardet

from ..abstract import FileHandler
from .codec import parse_value
from .consts import COMMENT_MARK, DEFAULT_SECTION, LineKind
from .model import IniDocument, IniFormat, IniLine
from .writer import iter_lines


def classify_line(
    text: str,
    section: str = DEFAULT_SECTION,
    separator: str = '=',
    lineno: int = 0
) -> IniLine | None:
    """Turn one line into an `IniLine`, or `None` if it means nothing."""
    text = text.strip()
    if not text:
        return None

    if text[0] == COMMENT_MARK:
        return IniLine(kind=LineKind.COMMENT, section=section, comment=text[1:])

    if text[0] == '[' and (end := text.find(']')) > 1:
        comment = None
        if (idx := text.find(COMMENT_MARK, end)) != -1 and \
                text[idx + 1:].strip():
            comment = text[idx + 1:]
        return IniLine(
            kind=LineKind.SECTION, section=text[1:end], comment=comment)

    # an empty key (separator at 0) is no pair either.
    if (sep := text.find(separator)) > 0:
        declared = text[:sep].rstrip()
        key = declared.split(None, 1)[0]
        if key != declared:
            logging.warning(
                f'line {lineno}: key names can\'t contain spaces, '
                f'"{declared}" was truncated to "{key}".')
        return IniLine.pair(
            section, key, parse_value(text, sep + len(separator)))
    return None


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str,
        encoding: str | None = None,
        fmt: IniFormat | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._fmt = fmt

    @staticmethod
    def readlines(
        lines: Iterable[str], fmt: IniFormat | None = None
    ) -> IniDocument:
        """Parse already decoded lines (line endings are fine)."""
        ret = IniDocument(fmt)
        this_sect = DEFAULT_SECTION
        for lineno, i in enumerate(lines, 1):
            line = classify_line(
                i, this_sect, ret.fmt.input_separator, lineno)
            if line is None:
                continue
            if line.kind == LineKind.SECTION:
                this_sect = line.section
            ret._append(line)
        ret._place_default_header()
        return ret

    @staticmethod
    def readstream(
        buf: TextIOBase, fmt: IniFormat | None = None
    ) -> IniDocument:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        return IniParser.readlines(buf, fmt)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}
        logging.debug(f'decoding {filename} as {codec["encoding"]}.')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self) -> IniDocument:
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, self._fmt)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn), self._fmt)

    def write(self, instance: IniDocument, *, backup: bool = False) -> None:
        """保存到 INI 文件。

        若`backup=True`且目标文件已存在，则先将其复制为同目录下的`.bak`文件。
        """
        if backup and exists(self._fn):
            copyfile(self._fn, splitext(self._fn)[0] + '.bak')
        instance._place_default_header()
        with open(self._fn, 'w', encoding=self._codec) as fp:
            for i in iter_lines(instance, self._fmt):
                fp.write(f'{i}\n')

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load(
    filename: str,
    encoding: str | None = None,
    fmt: IniFormat | None = None
) -> IniDocument:
    return IniParser(filename, encoding, fmt).read()


def loads(text: str, fmt: IniFormat | None = None) -> IniDocument:
    return IniParser.readlines(text.splitlines(), fmt)


def dump(
    doc: IniDocument,
    filename: str,
    encoding: str | None = None, *,
    backup: bool = False
) -> None:
    IniParser(filename, encoding, doc.fmt).write(doc, backup=backup)
