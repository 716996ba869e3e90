# -*- encoding: utf-8 -*-
# @File   : locking.py
# @Time   : 2024/10/13 00:12:37
# @Author : Kariko Lin

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Condition, Lock


class RWLock:
    """Readers share, writers are exclusive.

    Waiting writers block new readers, so a steady stream of getters
    would not starve `load()`. Not re-entrant on either side.
    """
    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True

    def release_write(self) -> None:
        with self._cond:
            self._writing = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writing(self) -> bool:
        return self._writing
