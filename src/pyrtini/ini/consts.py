# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:40:17

from enum import Enum


class LineKind(int, Enum):
    NONE = 0
    COMMENT = 1
    KEY_VALUE = 2
    SECTION = 3


# keys and comments before any `[header]` land here.
DEFAULT_SECTION = 'default'
DEFAULT_SECTION_FOLDED = DEFAULT_SECTION.lower()

COMMENT_MARK = ';'
ESCAPE_MARK = '\\'
QUOTE_MARKS = ('"', "'")
ARRAY_DELIMITER = ','
ARRAY_JOINER = ', '
