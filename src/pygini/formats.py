# -*- encoding: utf-8 -*-
# @File   : formats.py
# @Time   : 2024/10/13 15:27:51
# @Author : Kariko Lin

"""`SectionMap` as JSON or YAML documents, e.g.

    ```json
    {
      "protocol": 1,
      "data": {
        "": [{"k": "app_name", "v": "demo"}],
        "file": [{"k": "include", "v": "extra.conf"}]
      }
    }
    ```

The default section is keyed by `""`. Pairs stay in a list,
so the order survives.
"""

import json
from os import PathLike
from typing import Any, TypedDict

import yaml

from .abstract import FileHandler
from .model import Key, KeySlice, SectionMap

__all__ = ['IniJsonParser', 'IniYamlParser']

PROTOCOL = 1


class _KeyPack(TypedDict):
    k: str
    v: str


class _StructDoc(TypedDict, total=False):
    protocol: int
    data: dict[str, list[_KeyPack]]


class InvalidStructDocument(ValueError):
    """Not a document written by `IniJsonParser` / `IniYamlParser`."""
    pass


# should keep this base class for the shared conversions.
class IniStructParser(FileHandler[SectionMap]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def to_document(sections: SectionMap) -> _StructDoc:
        return _StructDoc(
            protocol=PROTOCOL,
            data={
                name: [_KeyPack(k=i.key, v=i.value) for i in pairs]
                for name, pairs in sections.items()
            })

    @staticmethod
    def from_document(doc: Any) -> SectionMap:
        if not isinstance(doc, dict) or not isinstance(doc.get('data'), dict):
            raise InvalidStructDocument('missing "data" mapping.')
        # YAML is read without type guessing, so the protocol is a string.
        if str(doc.get('protocol', PROTOCOL)) != str(PROTOCOL):
            raise InvalidStructDocument(
                f'unsupported protocol {doc["protocol"]}.')
        ret = SectionMap()
        for name, pairs in doc['data'].items():
            if pairs is None:
                pairs = []
            if not isinstance(pairs, list):
                raise InvalidStructDocument(
                    f'section "{name}" is not a list of pairs.')
            ret[str(name)] = KeySlice(
                IniStructParser.__to_key(name, i) for i in pairs)
        return ret

    @staticmethod
    def __to_key(section: str, pair: Any) -> Key:
        if not isinstance(pair, dict) or 'k' not in pair:
            raise InvalidStructDocument(
                f'section "{section}" has a pair without "k": {pair!r}')
        value = pair.get('v')
        if isinstance(value, (dict, list)):
            raise InvalidStructDocument(
                f'section "{section}" has a non scalar value: {pair!r}')
        return Key.from_dict({
            'k': pair['k'],
            'v': '' if value is None else value
        })


class IniJsonParser(IniStructParser):
    def read(self) -> SectionMap:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self.from_document(json.load(fp))

    def write(self, instance: SectionMap, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(self.to_document(instance), fp,
                      ensure_ascii=False, indent=indent)


class IniYamlParser(IniStructParser):
    def read(self) -> SectionMap:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            # BaseLoader keeps every scalar a string, `true` stays `true`.
            return self.from_document(yaml.load(fp, yaml.BaseLoader))

    def write(self, instance: SectionMap, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.dump(self.to_document(instance), fp,
                      allow_unicode=True, sort_keys=False, indent=indent)
