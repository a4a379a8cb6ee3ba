# Local development store: reads collections from a YAML file on every fetch.
#
# File layout:
#   audio_content:
#     - id: drink
#       question: ชอบดื่มอะไร
#       keywords: [เครื่องดื่ม]
#       fern_answer: ชาเย็น
#       nannam_answer: กาแฟ

from __future__ import annotations
import logging
import os
from typing import List, Optional

import yaml

from ..errors import StoreUnavailableError
from ..search.types import AnswerFields, Entry
from .memory import MemoryEntryStore

logger = logging.getLogger("fernbot.store.yaml")


class YamlEntryStore:
    def __init__(self, path: str):
        self.path = path

    def _load(self) -> MemoryEntryStore:
        if not os.path.exists(self.path):
            raise StoreUnavailableError(f"Entries file not found: {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise StoreUnavailableError(f"Cannot read entries file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreUnavailableError(f"Entries file {self.path} must map collection names to lists")
        return MemoryEntryStore(data)

    def fetch_all(self, collection: str, answer_fields: Optional[AnswerFields] = None) -> List[Entry]:
        entries = self._load().fetch_all(collection, answer_fields)
        logger.debug("Loaded %d entries from %s[%s]", len(entries), self.path, collection)
        return entries

    def close(self) -> None:
        pass
