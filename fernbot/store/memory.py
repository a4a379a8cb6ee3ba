# In-process store backed by plain dicts. Used by tests and by YamlEntryStore.

from __future__ import annotations
from typing import Any, Dict, List, Optional

from ..search.types import DEFAULT_ANSWER_FIELDS, AnswerFields, Entry


class MemoryEntryStore:
    def __init__(self, collections: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.collections: Dict[str, List[Dict[str, Any]]] = collections or {}

    def fetch_all(self, collection: str, answer_fields: Optional[AnswerFields] = None) -> List[Entry]:
        fields = answer_fields or DEFAULT_ANSWER_FIELDS
        docs = self.collections.get(collection) or []
        entries: List[Entry] = []
        for i, doc in enumerate(docs):
            if not isinstance(doc, dict):
                continue
            doc_id = doc.get("id", f"{collection}-{i}")
            entries.append(Entry.from_dict(doc_id, doc, fields))
        return entries

    def close(self) -> None:
        pass
