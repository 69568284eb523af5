# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:30:26

import logging

from .ini import (
    DEFAULT_SECTION,
    IniConsistencyError,
    IniDocument,
    IniFormat,
    IniLine,
    IniParser,
    LineKind,
    dump,
    dumps,
    load,
    loads
)

__all__ = [
    'DEFAULT_SECTION', 'LineKind',
    'IniDocument', 'IniFormat', 'IniLine',
    'IniParser', 'IniConsistencyError',
    'load', 'loads', 'dump', 'dumps'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
