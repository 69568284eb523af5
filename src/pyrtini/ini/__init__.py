# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:38:44

from .codec import ParsedValue, format_value, parse_value
from .consts import DEFAULT_SECTION, LineKind
from .model import IniDocument, IniFormat, IniLine
from .parser import IniParser, classify_line, dump, load, loads
from .writer import IniConsistencyError, dumps, format_line, iter_lines
