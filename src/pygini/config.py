# -*- encoding: utf-8 -*-
# @File   : config.py
# @Time   : 2024/10/13 00:40:19
# @Author : Kariko Lin

"""The configuration object: one `SectionMap` bound to a file.

Getters share an `RWLock`; loading and writing take it exclusively,
once per call. Private helpers (`_xxx`) assume the lock is held.
"""

import logging
import math
import re
import struct
from io import TextIOBase
from os import PathLike, fspath, makedirs
from os.path import join
from typing import BinaryIO, Callable, TextIO, TypeVar

from .consts import (
    DEFAULT_DIRECTORY,
    DEFAULT_SECTION,
    INT64_MAX,
    INT64_MIN,
    TRUE_LITERALS,
    ParseOptions,
)
from .locking import RWLock
from .model import KeySlice, SectionMap
from .parser import (
    IniTreeParser,
    MissingFilenameError,
    NumericConversionError,
    dumps,
    parse_bytes,
    parse_text,
    write_stream,
)

__all__ = ['IniConfig']

log = logging.getLogger(__name__)

_N = TypeVar('_N', int, float)
_DECIMAL = re.compile(r'[+-]?[0-9]+')
_INF_LITERALS = ('inf', 'infinity')


def _to_int(value: str) -> int:
    if not _DECIMAL.fullmatch(value):
        raise ValueError(f'invalid literal for int with base 10: {value!r}')
    return int(value)


def _to_int64(value: str) -> int:
    ret = _to_int(value)
    if not INT64_MIN <= ret <= INT64_MAX:
        raise OverflowError(f'{value} out of int64 range')
    return ret


def _to_float64(value: str) -> float:
    if '_' in value:
        raise ValueError(f'could not convert string to float: {value!r}')
    ret = float(value)
    if math.isinf(ret) and value.lstrip('+-').lower() not in _INF_LITERALS:
        raise OverflowError(f'{value} out of float64 range')
    return ret


def _to_float32(value: str) -> float:
    # round-trip through a C float; OverflowError on +-inf overflow.
    return struct.unpack('f', struct.pack('f', _to_float64(value)))[0]


class IniConfig:
    def __init__(
        self,
        directory: str | PathLike[str] = DEFAULT_DIRECTORY,
        options: ParseOptions | None = None
    ) -> None:
        self._dir = fspath(directory)
        self._fn = ''
        self._opts = options or ParseOptions()
        self._sections = SectionMap()
        self._lock = RWLock()

    # ================ file binding ================

    @property
    def directory(self) -> str:
        return self._dir

    @directory.setter
    def directory(self, value: str | PathLike[str]) -> None:
        self._dir = fspath(value)

    @property
    def filename(self) -> str:
        return self._fn

    @filename.setter
    def filename(self, value: str) -> None:
        with self._lock.write():
            self._fn = value

    @property
    def options(self) -> ParseOptions:
        return self._opts

    def set_section_map(self, sections: SectionMap) -> None:
        """Replace loaded content with a copy of `sections`."""
        own = SectionMap()
        for name, pairs in sections.items():
            own[name] = KeySlice(pairs)
        with self._lock.write():
            self._sections = own

    # ================ loading ================

    def load(self, filename: str) -> None:
        """Load `directory/filename`, together with its include if any.

        Results accumulate onto what is already loaded, and `filename`
        is only bound once the file has been read.
        """
        self._load(filename)

    def reload(self) -> None:
        self._load(self._fn)

    def _load(self, filename: str) -> None:
        if not filename:
            raise MissingFilenameError()
        # read (and merge include) outside of the lock.
        handler = IniTreeParser(join(self._dir, filename), self._opts)
        text = handler.readtext()
        with self._lock.write():
            self._fn = filename
            parse_text(text, self._sections, self._opts)
        log.debug('loaded %s', handler)

    def load_bytes(
        self, data: bytes,
        line_sep: str | None = None,
        kv_sep: str | None = None
    ) -> None:
        """Parse an in-memory buffer.

        `line_sep` and `kv_sep` override the options for this call only.
        """
        opts = self._opts.with_separators(line_sep, kv_sep)
        with self._lock.write():
            parse_bytes(data, self._sections, opts)

    def load_stream(
        self, fp: BinaryIO | TextIO,
        line_sep: str | None = None,
        kv_sep: str | None = None
    ) -> None:
        data = fp.read()
        if isinstance(data, str):
            data = data.encode(self._opts.encoding or 'utf-8')
        self.load_bytes(data, line_sep, kv_sep)

    # ================ lookups ================

    def _get(self, section: str, key: str) -> str:
        return self._sections.lookup(section, key)

    def section_get(self, section: str, key: str) -> str:
        """Value of `key` in `section`, or `''` when either is absent.

        Use `has_key()` to tell "absent" from "empty".
        """
        with self._lock.read():
            return self._get(section, key)

    def _convert(
        self, section: str, key: str,
        converter: Callable[[str], _N], target: str
    ) -> _N:
        with self._lock.read():
            value = self._get(section, key)
        try:
            return converter(value)
        except (ValueError, OverflowError) as e:
            raise NumericConversionError(section, key, value, target) from e

    def section_int(self, section: str, key: str) -> int:
        return self._convert(section, key, _to_int64, 'int')

    def section_int64(self, section: str, key: str) -> int:
        return self._convert(section, key, _to_int64, 'int64')

    def section_float32(self, section: str, key: str) -> float:
        return self._convert(section, key, _to_float32, 'float32')

    def section_float64(self, section: str, key: str) -> float:
        return self._convert(section, key, _to_float64, 'float64')

    def section_bool(self, section: str, key: str) -> bool:
        """`True` for literals like `1`, `on`, `Yes`.

        Anything unknown (absent included) is `False`,
        same as `0`, `off` and so on.
        """
        return self.section_get(section, key) in TRUE_LITERALS

    def get(self, key: str) -> str:
        return self.section_get(DEFAULT_SECTION, key)

    def get_bool(self, key: str) -> bool:
        return self.section_bool(DEFAULT_SECTION, key)

    def get_int(self, key: str) -> int:
        return self.section_int(DEFAULT_SECTION, key)

    def get_int64(self, key: str) -> int:
        return self.section_int64(DEFAULT_SECTION, key)

    def get_float32(self, key: str) -> float:
        return self.section_float32(DEFAULT_SECTION, key)

    def get_float64(self, key: str) -> float:
        return self.section_float64(DEFAULT_SECTION, key)

    def has_key(self, section: str, key: str) -> bool:
        with self._lock.read():
            return self._sections.has_key(section, key)

    def has_section(self, section: str) -> bool:
        with self._lock.read():
            return section in self._sections

    def get_sections(self) -> list[str]:
        """All section names but the default one, sorted."""
        with self._lock.read():
            return self._sections.section_names()

    def get_keys(self, section: str) -> KeySlice:
        """A copy of the section's pairs; editing it changes nothing here."""
        with self._lock.read():
            return KeySlice(self._sections.keys_of(section))

    # ================ writing ================

    def write(self, fp: TextIO | BinaryIO) -> None:
        """Serialize into `fp`, either a text or a binary writer."""
        with self._lock.write():
            if isinstance(fp, TextIOBase):
                write_stream(self._sections, fp, self._opts)
            else:
                fp.write(self._dumps().encode(self._opts.encoding or 'utf-8'))

    def _dumps(self) -> str:
        return dumps(self._sections, self._opts)

    def dumps(self) -> str:
        with self._lock.read():
            return self._dumps()

    def _create(self, filename: str, content: str) -> int:
        if self._dir:
            makedirs(self._dir, exist_ok=True)
        path = join(self._dir, filename)
        with open(path, 'w', encoding=self._opts.encoding or 'utf-8',
                  newline='') as fp:
            n = fp.write(content)
        log.debug('wrote %d chars to %s', n, path)
        return n

    def write_file(self, filename: str, content: str | None = None) -> int:
        """Write `content` into `directory/filename`,
        or this configuration when `content` is None.

        Returns:
            Number of characters written.
        """
        if not filename:
            raise MissingFilenameError()
        with self._lock.write():
            return self._create(
                filename, self._dumps() if content is None else content)

    def write_origin_file(self) -> None:
        """Rewrite the file this configuration was loaded from.

        NOTE: an included file is NOT split back out.
        """
        if not self._fn:
            raise MissingFilenameError()
        with self._lock.write():
            self._create(self._fn, self._dumps())

    def __str__(self) -> str:
        return f'INI config: {join(self._dir, self._fn)}'
