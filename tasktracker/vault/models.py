"""Document store entries."""
from __future__ import annotations

from dataclasses import dataclass, field

from .paths import ROOT_PATH, join_path, normalize_path, path_key

MARKDOWN_EXTENSION = 'md'


@dataclass(frozen=True)
class VaultFile:
    path: str
    name: str
    parent: str = ROOT_PATH

    @property
    def basename(self) -> str:
        stem, dot, _ = self.name.rpartition('.')
        return stem if dot else self.name

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition('.')
        return ext if dot else ''

    @classmethod
    def in_folder(cls, folder: str, name: str) -> VaultFile:
        return cls(path=join_path(folder, name), name=name, parent=normalize_path(folder))


@dataclass(frozen=True)
class VaultFolder:
    path: str
    children: tuple[VaultFile | VaultFolder, ...] = field(default_factory=tuple)

    def files(self) -> list[VaultFile]:
        return [c for c in self.children if isinstance(c, VaultFile)]


def find_document(folder: VaultFolder, file_name: str) -> VaultFile | None:
    """Return the markdown child named exactly ``file_name + '.md'``.

    Case-sensitive; NFC and NFD spellings of the same name are equal.
    """
    target = path_key(f"{file_name}.{MARKDOWN_EXTENSION}")
    for child in folder.files():
        if child.extension == MARKDOWN_EXTENSION and path_key(child.name) == target:
            return child
    return None


__all__ = ["MARKDOWN_EXTENSION", "VaultFile", "VaultFolder", "find_document"]
