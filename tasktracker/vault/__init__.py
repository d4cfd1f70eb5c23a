"""Document store collaborator: vault paths, entries, change bus and store."""
from .events import ChangeBus
from .models import VaultFile, VaultFolder, find_document
from .paths import ROOT_PATH, normalize_path, path_key
from .store import DocumentStore, VaultStore

__all__ = [
    "ChangeBus",
    "VaultFile",
    "VaultFolder",
    "find_document",
    "ROOT_PATH",
    "normalize_path",
    "path_key",
    "DocumentStore",
    "VaultStore",
]
