"""
This module contains the read-only filesystem operations used by the
matchers, behind a small interface so that a different tree (for
example an in-memory one) can be scanned instead of the real disk.

Absence of a path is always signalled with `FileNotFoundError`. Any
other failure is signalled with another `OSError`.
"""
import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class EntryKind(str, Enum):
    FILE = 'file'
    DIRECTORY = 'directory'
    OTHER = 'other'


@dataclass(frozen=True)
class DirEntry:
    name: str
    kind: EntryKind


class FileSystem(Protocol):
    def list_dir(self, path: Path) -> list[DirEntry]:
        ...

    def kind(self, path: Path) -> EntryKind:
        ...


def _kind_from_mode(mode: int) -> EntryKind:
    if stat.S_ISREG(mode):
        return EntryKind.FILE

    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY

    return EntryKind.OTHER


class LocalFileSystem:
    """The real filesystem. Symbolic links resolve to their targets."""

    def list_dir(self, path: Path) -> list[DirEntry]:
        entries = []

        with os.scandir(path) as it:
            for entry in it:
                try:
                    kind = _kind_from_mode(entry.stat().st_mode)
                except FileNotFoundError:
                    # Dangling symbolic link
                    kind = EntryKind.OTHER

                entries.append(DirEntry(name=entry.name, kind=kind))

        return sorted(entries, key=lambda entry: entry.name)

    def kind(self, path: Path) -> EntryKind:
        return _kind_from_mode(os.stat(path).st_mode)


LOCAL_FILESYSTEM = LocalFileSystem()
