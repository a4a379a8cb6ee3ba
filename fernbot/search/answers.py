# Picks which persona's stored answer(s) to send for a matched entry.

from __future__ import annotations
from typing import Dict, Optional

from . import messages
from .types import Entry, Persona

DEFAULT_NAMES: Dict[Persona, str] = {Persona.A: "เฟิร์น", Persona.B: "น่านน้ำ"}


def select_answer(entry: Entry, persona: Persona, names: Optional[Dict[Persona, str]] = None) -> str:
    """Return the reply text for ``entry``; never empty.

    A single-persona query gets that persona's answer, or the other persona's
    answer flagged as the closest alternative. A query for both (or neither)
    gets both answers, attributed and separated by a blank line.
    """
    names = names or DEFAULT_NAMES
    answer_a = entry.answer_for(Persona.A)
    answer_b = entry.answer_for(Persona.B)

    if persona in (Persona.A, Persona.B):
        other = Persona.B if persona is Persona.A else Persona.A
        own = answer_a if persona is Persona.A else answer_b
        alt = answer_b if persona is Persona.A else answer_a
        if own:
            return own
        if alt:
            return messages.NO_ANSWER_FOR_PERSONA.format(
                missing=names[persona], other=names[other], answer=alt
            )
        return messages.NO_ANSWER

    if answer_a and answer_b:
        return "\n\n".join(
            [
                messages.attributed(names[Persona.A], answer_a),
                messages.attributed(names[Persona.B], answer_b),
            ]
        )
    return answer_a or answer_b or messages.NO_ANSWER
