from collections.abc import Callable
from pathlib import Path
from typing import Any

from pytest import fixture

from schema_match.filesystem import DirEntry, EntryKind

# A tree is a dict. Values that are dicts are directories, strings are
# file contents and anything else is some other kind of entry.
Tree = dict[str, Any]

MEMORY_ROOT = Path('/pack')


class InMemoryFileSystem:
    def __init__(self, tree: Tree, errors: dict[str, OSError] = {}) -> None:
        self.root = MEMORY_ROOT
        self.tree = tree
        self.errors = {self.root / path: error for path, error in errors.items()}
        self.inspected: list[Path] = []
        self.listed: list[Path] = []

    def _lookup(self, path: Path) -> Any:
        if path in self.errors:
            raise self.errors[path]

        node = self.tree
        for part in path.relative_to(self.root).parts:
            if not isinstance(node, dict) or part not in node:
                raise FileNotFoundError(2, 'No such file or directory', str(path))

            node = node[part]

        return node

    @staticmethod
    def _kind(node: Any) -> EntryKind:
        if isinstance(node, dict):
            return EntryKind.DIRECTORY

        if isinstance(node, str):
            return EntryKind.FILE

        return EntryKind.OTHER

    def list_dir(self, path: Path) -> list[DirEntry]:
        path = Path(path)
        self.listed.append(path)

        node = self._lookup(path)
        if not isinstance(node, dict):
            raise NotADirectoryError(20, 'Not a directory', str(path))

        return [
            DirEntry(name=name, kind=self._kind(child))
            for name, child in sorted(node.items())
        ]

    def kind(self, path: Path) -> EntryKind:
        path = Path(path)
        self.inspected.append(path)

        return self._kind(self._lookup(path))


@fixture
def memory_fs() -> Callable[..., InMemoryFileSystem]:
    def make(tree: Tree, errors: dict[str, OSError] = {}) -> InMemoryFileSystem:
        return InMemoryFileSystem(tree, errors=errors)

    return make


@fixture
def make_tree(tmp_path: Path) -> Callable[[Tree], Path]:
    """Write a tree to disk under `tmp_path / 'root'` and return its path."""

    def write(tree: Tree, parent: Path) -> None:
        for name, node in tree.items():
            path = parent / name

            if isinstance(node, dict):
                path.mkdir()
                write(node, path)
            else:
                path.write_text(node)

    def make(tree: Tree) -> Path:
        root = tmp_path / 'root'
        root.mkdir()
        write(tree, root)

        return root

    return make
