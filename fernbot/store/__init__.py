# Entry stores. FirestoreEntryStore is imported lazily by the app so that
# dev and test runs do not need Firebase credentials.

from .base import EntryStore
from .memory import MemoryEntryStore
from .yaml_store import YamlEntryStore

__all__ = ["EntryStore", "MemoryEntryStore", "YamlEntryStore"]
