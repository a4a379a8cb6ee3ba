# Interface every entry store implements.

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Protocol

if TYPE_CHECKING:
    from ..search.types import AnswerFields, Entry


class EntryStore(Protocol):
    def fetch_all(self, collection: str, answer_fields: Optional[AnswerFields] = None) -> List[Entry]:
        """Return every entry of ``collection`` in the store's own order.

        ``answer_fields`` names the persona answer fields; ``None`` means the
        default ``fern_answer``/``nannam_answer``.
        """
        ...

    def close(self) -> None:
        ...
