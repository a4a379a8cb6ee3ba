# Persona detection by alias substring matching.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import yaml

from .types import DEFAULT_ANSWER_FIELDS, AnswerFields, Persona

PERSONAS_PATH = os.path.join(os.path.dirname(__file__), "personas.yaml")


@dataclass
class PersonaProfile:
    persona: Persona
    name: str
    answer_field: str
    aliases: List[str] = field(default_factory=list)


def load_profiles(path: str = PERSONAS_PATH) -> Dict[Persona, PersonaProfile]:
    """Load the A/B persona profiles from personas.yaml."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"personas.yaml not found at {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    profiles: Dict[Persona, PersonaProfile] = {}
    default_fields = {Persona.A: DEFAULT_ANSWER_FIELDS.a, Persona.B: DEFAULT_ANSWER_FIELDS.b}
    for persona in (Persona.A, Persona.B):
        if persona.value not in data:
            raise KeyError(f"Persona '{persona.value}' not found in {path}")
        p = data[persona.value]
        profiles[persona] = PersonaProfile(
            persona=persona,
            name=p.get("name", persona.value),
            answer_field=p.get("answer_field") or default_fields[persona],
            aliases=[str(a).lower() for a in p.get("aliases", []) if str(a).strip()],
        )
    return profiles


class PersonaDetector:
    """Classifies a query as addressing persona A, persona B, or both/neither."""

    def __init__(self, profiles: Optional[Dict[Persona, PersonaProfile]] = None):
        self.profiles = profiles or load_profiles()

    @property
    def aliases_a(self) -> Tuple[str, ...]:
        return tuple(self.profiles[Persona.A].aliases)

    @property
    def aliases_b(self) -> Tuple[str, ...]:
        return tuple(self.profiles[Persona.B].aliases)

    @property
    def all_aliases(self) -> List[str]:
        return [*self.aliases_a, *self.aliases_b]

    @property
    def answer_fields(self) -> AnswerFields:
        """Document fields to read each persona's answer from."""
        return AnswerFields(
            a=self.profiles[Persona.A].answer_field,
            b=self.profiles[Persona.B].answer_field,
        )

    def name_of(self, persona: Persona) -> str:
        return self.profiles[persona].name

    def detect(self, raw) -> Persona:
        if not isinstance(raw, str):
            return Persona.BOTH
        text = raw.lower()
        hit_a = any(alias in text for alias in self.aliases_a)
        hit_b = any(alias in text for alias in self.aliases_b)
        if hit_a and not hit_b:
            return Persona.A
        if hit_b and not hit_a:
            return Persona.B
        return Persona.BOTH
