# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:15:40
# @Author : Kariko Lin

from dataclasses import dataclass, replace

DEFAULT_SECTION = ''
DEFAULT_LINE_SEPARATOR = '\n'
DEFAULT_KV_SEPARATOR = '='
DEFAULT_DIRECTORY = './conf'

COMMENT_MARKS = (';', '#')
QUOTES = ('"', "'")

# anything else, `0`, `off`, `No` or garbage alike, reads as False.
TRUE_LITERALS = frozenset([
    '1', 't', 'T', 'true', 'TRUE', 'True',
    'on', 'ON', 'On', 'yes', 'YES', 'Yes'
])

# chardet guesses below this are not trusted.
CODEC_CONFIDENCE = 0.8

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True, kw_only=True)
class ParseOptions:
    """How a configuration is split into lines and pairs,
    and how it is written back.

    Captured once by `IniConfig` and never touched by parse calls.
    """
    line_sep: str = DEFAULT_LINE_SEPARATOR
    kv_sep: str = DEFAULT_KV_SEPARATOR
    parse_section: bool = True
    skip_comments: bool = True
    trim_quotes: bool = True
    # None lets chardet guess.
    encoding: str | None = None
    include_section: str = 'file'
    include_key: str = 'include'

    def __post_init__(self) -> None:
        if not self.line_sep:
            raise ValueError('line separator must not be empty')
        if not self.kv_sep:
            raise ValueError('key/value separator must not be empty')

    def with_separators(
        self, line_sep: str | None = None, kv_sep: str | None = None
    ) -> 'ParseOptions':
        """Copy of self with per-call separators applied."""
        if line_sep is None and kv_sep is None:
            return self
        return replace(
            self,
            line_sep=line_sep or self.line_sep,
            kv_sep=kv_sep or self.kv_sep)
