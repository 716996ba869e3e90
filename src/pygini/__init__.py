# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:01:33
# @Author : Kariko Lin

import logging

from .config import IniConfig
from .consts import DEFAULT_SECTION, ParseOptions
from .formats import IniJsonParser, IniYamlParser
from .model import Key, KeySlice, SectionMap
from .parser import (
    EmptyInputError,
    IniError,
    IniParser,
    IniTreeParser,
    MalformedLineError,
    MissingFilenameError,
    NumericConversionError,
    combine,
    dumps,
    parse_bytes,
    parse_text,
)

__all__ = [
    'IniConfig', 'ParseOptions', 'DEFAULT_SECTION',
    'Key', 'KeySlice', 'SectionMap',
    'IniParser', 'IniTreeParser', 'IniJsonParser', 'IniYamlParser',
    'parse_bytes', 'parse_text', 'combine', 'dumps',
    'IniError', 'EmptyInputError', 'MalformedLineError',
    'MissingFilenameError', 'NumericConversionError'
]

# the embedding application decides where records go.
logging.getLogger(__name__).addHandler(logging.NullHandler())
