# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 21:30:02
# @Author : Kariko Lin

"""
Basically INI structure: a table of sections,
each of them an ordered list of unique key/value pairs.

The default section (those pairs before any `[section]`) is keyed by `''`.
"""

from collections.abc import Iterable, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Iterator, overload

from .consts import DEFAULT_SECTION


@dataclass(frozen=True)
class Key:
    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {'k': self.key, 'v': self.value}

    @classmethod
    def from_dict(cls, raw: dict[str, str]) -> 'Key':
        return cls(str(raw['k']), str(raw['v']))


class KeySlice(Sequence[Key]):
    """Pairs of one section, in order of first occurrence.

    Keys are unique: `add()` refuses an empty key or one already present,
    so the first occurrence always wins.
    """
    def __init__(self, pairs: Iterable[Key] = ()) -> None:
        self.__raw: list[Key] = []
        self.__index: dict[str, int] = {}
        for i in pairs:
            self.add(i.key, i.value)

    @overload
    def __getitem__(self, index: int) -> Key: ...
    @overload
    def __getitem__(self, index: slice) -> list[Key]: ...

    def __getitem__(self, index: int | slice) -> Key | list[Key]:
        return self.__raw[index]

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[Key]:
        return iter(self.__raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeySlice):
            return self.__raw == other.__raw
        if isinstance(other, list):
            return self.__raw == other
        return NotImplemented

    def __repr__(self) -> str:
        return f'KeySlice({self.__raw!r})'

    def add(self, key: str, value: str) -> bool:
        """Append a pair unless `key` is empty or already exists.

        Returns:
            `True` if appended.
        """
        if not key or key in self.__index:
            return False
        self.__index[key] = len(self.__raw)
        self.__raw.append(Key(key, value))
        return True

    def has(self, key: str) -> bool:
        return key in self.__index

    def get(self, key: str, default: str = '') -> str:
        if key not in self.__index:
            return default
        return self.__raw[self.__index[key]].value

    def to_dict(self) -> dict[str, str]:
        return {i.key: i.value for i in self.__raw}


class SectionMap(MutableMapping[str, KeySlice]):
    """... is simply a group of `KeySlice`,
    representing a whole INI file (or a root file merged with its include).

    The default section always exists; deleting it just empties it.
    """
    def __init__(self) -> None:
        self.__raw: dict[str, KeySlice] = {DEFAULT_SECTION: KeySlice()}

    @property
    def header(self) -> KeySlice:
        """Pairs not belonging to any named section."""
        return self.__raw[DEFAULT_SECTION]

    def __getitem__(self, key: str) -> KeySlice:
        return self.__raw[key]

    def __setitem__(self, key: str, value: KeySlice | Iterable[Key]) -> None:
        self.__raw[key] = (
            value if isinstance(value, KeySlice) else KeySlice(value))

    def __delitem__(self, key: str) -> None:
        if key == DEFAULT_SECTION:
            self.__raw[key] = KeySlice()
            return
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return 'SectionMap { .sections = %d }' % len(self.__raw)

    def ensure_default(self) -> KeySlice:
        return self.__raw.setdefault(DEFAULT_SECTION, KeySlice())

    def open_section(self, name: str) -> KeySlice:
        """Start `name` over with an empty `KeySlice`.

        Whatever was stored under `name` before is dropped.
        """
        self.__raw[name] = KeySlice()
        return self.__raw[name]

    # lookup primitive, see `IniConfig.section_get()`.
    def lookup(self, section: str, key: str) -> str:
        if section not in self.__raw:
            return ''
        return self.__raw[section].get(key)

    def has_key(self, section: str, key: str) -> bool:
        return section in self.__raw and self.__raw[section].has(key)

    def section_names(self) -> list[str]:
        """Named sections, sorted, without the default one."""
        return sorted(i for i in self.__raw if i != DEFAULT_SECTION)

    def keys_of(self, section: str) -> KeySlice:
        return self.__raw.get(section, KeySlice())

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {k: v.to_dict() for k, v in self.__raw.items()}
