# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 22:04:45
# @Author : Kariko Lin

"""Text <-> `SectionMap`.

We do parsing based on the following consumption:
1. One line, one thing: blank, comment, `[section]` or `key = value`.
Separators are literal strings (`\\n` and `=` by default),
so a quoted value is NOT protected from them.

2. An include is only one level deep. The root file names it by

    ```ini
    [file]
    include = other.conf  ; relative to the root file's folder.
    ```

    and sections of both files are merged (root file lines go first,
    thus root values win on shared keys).
"""

import logging
from io import StringIO
from os import PathLike, makedirs
from os.path import join
from typing import TextIO
from warnings import warn

from chardet import detect as guess_codec

from .abstract import FileHandler
from .consts import (
    CODEC_CONFIDENCE,
    COMMENT_MARKS,
    DEFAULT_SECTION,
    QUOTES,
    ParseOptions,
)
from .model import KeySlice, SectionMap

__all__ = [
    'IniError', 'EmptyInputError', 'MalformedLineError',
    'MissingFilenameError', 'NumericConversionError',
    'decode', 'parse_text', 'parse_bytes',
    'combine_text', 'combine', 'write_stream', 'dumps',
    'IniParser', 'IniTreeParser'
]

log = logging.getLogger(__name__)


class IniError(Exception):
    """Base of everything this package raises by itself."""
    pass


class EmptyInputError(IniError):
    """Nothing to parse."""
    def __init__(self, source: str = '') -> None:
        super().__init__(f'empty input{f": {source}" if source else ""}')
        self.source = source


class MalformedLineError(IniError):
    """A line which is neither blank, comment, section
    nor a key/value pair."""
    def __init__(self, line: str, lineno: int | None = None) -> None:
        where = '' if lineno is None else f' (line {lineno})'
        super().__init__(f'{line!r} is NOT a valid key/value pair{where}')
        self.line = line
        self.lineno = lineno


class MissingFilenameError(IniError):
    """Reading was requested but no filename has been set."""
    def __init__(self) -> None:
        super().__init__('need filename')


class NumericConversionError(IniError, ValueError):
    def __init__(self, section: str, key: str, value: str, target: str):
        super().__init__(
            f'[{section}] {key} = {value!r} is not a valid {target}')
        self.section = section
        self.key = key
        self.value = value
        self.target = target


def decode(raw: bytes, encoding: str | None = None) -> str:
    """Decode a configuration buffer.

    Without `encoding`, try UTF-8 first, then let `chardet` guess,
    then `gbk`, and at last UTF-8 with replacement characters,
    which never fails.
    """
    if encoding is not None:
        text = raw.decode(encoding)
    else:
        try:
            text = raw.decode('utf-8')
        except UnicodeDecodeError:
            text = _decode_guessed(raw)
    return text.removeprefix('\ufeff')


def _decode_guessed(raw: bytes) -> str:
    codec = guess_codec(raw)
    candidates = ['gbk']
    if codec['encoding'] and codec['confidence'] >= CODEC_CONFIDENCE:
        candidates.insert(0, codec['encoding'])
    for i in candidates:
        try:
            text = raw.decode(i)
        except (UnicodeDecodeError, LookupError):
            continue
        log.debug('not utf-8, decoded as %s', i)
        return text
    log.debug('undecodable bytes replaced')
    return raw.decode('utf-8', errors='replace')


def _is_comment(line: str, options: ParseOptions) -> bool:
    return options.skip_comments and line[0] in COMMENT_MARKS


def _section_name(line: str, options: ParseOptions) -> str | None:
    if options.parse_section and line[0] == '[' and line[-1] == ']':
        return line[1:-1]
    return None


def _trim_quotes(value: str) -> str:
    if value[:1] in QUOTES:
        value = value[1:]
    if value[-1:] in QUOTES:
        value = value[:-1]
    return value


def parse_text(text: str, sections: SectionMap, options: ParseOptions) -> None:
    """Parse decoded text into `sections`, in place.

    Pairs are layered onto what `sections` already holds,
    except that a `[section]` line starts that section over.

    Raises:
        EmptyInputError: `text` is empty.
        MalformedLineError: on the first line without `options.kv_sep`.
        Lines before it are already applied.
    """
    if not text:
        raise EmptyInputError()
    current = sections.ensure_default()
    kv_sep = options.kv_sep
    for lineno, line in enumerate(text.split(options.line_sep), 1):
        line = line.strip()
        if not line or _is_comment(line, options):
            continue
        if (name := _section_name(line, options)) is not None:
            current = sections.open_section(name)
            continue

        pos = line.find(kv_sep)
        if pos < 0:
            raise MalformedLineError(line, lineno)
        key = line[:pos].strip()
        value = line[pos + len(kv_sep):].strip()
        if options.trim_quotes:
            value = _trim_quotes(value)
        # dupes and empty keys dropped, the first one wins.
        current.add(key, value)


def parse_bytes(raw: bytes, sections: SectionMap,
                options: ParseOptions) -> None:
    """Decode and parse `raw` into `sections`. See `parse_text()`."""
    if not raw:
        raise EmptyInputError()
    parse_text(decode(raw, options.encoding), sections, options)


def _split_sections(text: str, options: ParseOptions) -> dict[str, list[str]]:
    """Like `parse_text()`, but keep body lines as they are."""
    ret: dict[str, list[str]] = {DEFAULT_SECTION: []}
    current = ret[DEFAULT_SECTION]
    for line in text.split(options.line_sep):
        line = line.strip()
        if not line or _is_comment(line, options):
            continue
        if (name := _section_name(line, options)) is not None:
            current = ret.setdefault(name, [])
            continue
        current.append(line)
    return ret


def combine_text(*texts: str, options: ParseOptions) -> str:
    """Merge sections of several buffers into one, ready to re-parse.

    Bodies of a same section concatenate in input order,
    and sections are written in order of first appearance.
    """
    merged: dict[str, list[str]] = {DEFAULT_SECTION: []}
    for i in texts:
        for name, lines in _split_sections(i, options).items():
            merged.setdefault(name, []).extend(lines)

    ret = list(merged[DEFAULT_SECTION])
    for name, lines in merged.items():
        if name == DEFAULT_SECTION:
            continue
        ret.append(f'[{name}]')
        ret.extend(lines)
    # trailing separator keeps an all-comment input from being "empty".
    return options.line_sep.join(ret) + options.line_sep


def combine(*raws: bytes, options: ParseOptions) -> bytes:
    """`combine_text()` on raw buffers. The result is UTF-8."""
    return combine_text(
        *(decode(i, options.encoding) for i in raws),
        options=options
    ).encode('utf-8')


def _quote(value: str, options: ParseOptions) -> str:
    # the reader trims one layer, so give it one to trim.
    if options.trim_quotes and (value[:1] in QUOTES or value[-1:] in QUOTES):
        return f'"{value}"'
    return value


def _write_pairs(pairs: KeySlice, fp: TextIO, options: ParseOptions) -> None:
    for i in pairs:
        fp.write(f'{i.key} {options.kv_sep} {_quote(i.value, options)}'
                 f'{options.line_sep}')


def write_stream(sections: SectionMap, fp: TextIO,
                 options: ParseOptions) -> None:
    """Default section first (without header),
    then named sections in sorted order, one blank line between."""
    written = False
    if len(sections.header) > 0:
        _write_pairs(sections.header, fp, options)
        written = True
    for name in sections.section_names():
        if written:
            fp.write(options.line_sep)
        fp.write(f'[{name}]{options.line_sep}')
        _write_pairs(sections[name], fp, options)
        written = True


def dumps(sections: SectionMap, options: ParseOptions) -> str:
    buf = StringIO()
    write_stream(sections, buf, options)
    return buf.getvalue()


class IniParser(FileHandler[SectionMap]):
    def __init__(
        self,
        filename: str | PathLike[str],
        options: ParseOptions | None = None
    ) -> None:
        super().__init__(filename)
        self._opts = options or ParseOptions()

    @property
    def options(self) -> ParseOptions:
        return self._opts

    def _read_bytes(self, filename: str | None = None) -> bytes:
        with open(filename or self._fn, 'rb') as fp:
            return fp.read()

    def readtext(self) -> str:
        """Read and decode the file, without parsing."""
        raw = self._read_bytes()
        if not raw:
            raise EmptyInputError(self._fn)
        return decode(raw, self._opts.encoding)

    def readinto(self, sections: SectionMap) -> None:
        """Parse the file into an existing `SectionMap`."""
        parse_text(self.readtext(), sections, self._opts)

    def read(self) -> SectionMap:
        ret = SectionMap()
        self.readinto(ret)
        return ret

    def write(self, instance: SectionMap) -> None:
        if self.directory:
            makedirs(self.directory, exist_ok=True)
        # newline='' so that `line_sep` goes out untranslated.
        with open(self._fn, 'w', encoding=self._opts.encoding or 'utf-8',
                  newline='') as fp:
            write_stream(instance, fp, self._opts)
        log.debug('saved %d section(s) to %s', len(instance), self._fn)

    def __str__(self) -> str:
        return "INI file: " + super().__str__()


class IniTreeParser(IniParser):
    """`IniParser`, plus merging the file named by `[file] include`.

    Only one level: an include inside the included file is ignored.
    """
    def include_of(self, text: str) -> str:
        scratch = SectionMap()
        parse_text(text, scratch, self._opts)
        return scratch.lookup(self._opts.include_section,
                              self._opts.include_key)

    def readtext(self) -> str:
        root = super().readtext()
        if not (include := self.include_of(root)):
            return root

        path = join(self.directory, include)
        raw = self._read_bytes(path)
        if not raw:
            log.debug('include %s is empty, skipped', path)
            return root
        sub = decode(raw, self._opts.encoding)
        if nested := self.include_of(sub):
            warn(f'{path} includes "{nested}" as well, '
                 'but only one level of include is supported. Ignored.')
        log.debug('merging include %s into %s', path, self._fn)
        return combine_text(root, sub, options=self._opts)

    def __str__(self) -> str:
        return "INI tree root: " + FileHandler.__str__(self)
