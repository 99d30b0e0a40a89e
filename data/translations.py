"""
LECTIO - Translation Registry

The parallel translations the reader can display. The first definition is
the canonical translation: its book and chapter counts define which
locations are valid. The others are advisory and may have fewer verses.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.types import TranslationId

_SOURCE_ROOT = "https://raw.githubusercontent.com/thiagobodruk/bible/master/json"


@dataclass(frozen=True)
class TranslationDefinition:
    """Static description of one translation source."""
    id: TranslationId
    name: str
    short_name: str
    description: str
    source_url: str
    color: str


TRANSLATION_DEFINITIONS: Tuple[TranslationDefinition, ...] = (
    TranslationDefinition(
        id="kjv",
        name="King James Version",
        short_name="KJV",
        description="Public-domain King James Version.",
        source_url=f"{_SOURCE_ROOT}/en_kjv.json",
        color="#9c27b0",
    ),
    TranslationDefinition(
        id="bbe",
        name="Bible in Basic English",
        short_name="BBE",
        description="Simplified English translation (1949).",
        source_url=f"{_SOURCE_ROOT}/en_bbe.json",
        color="#ff9800",
    ),
    TranslationDefinition(
        id="es_rvr",
        name="Reina-Valera (Español)",
        short_name="RVR",
        description="Spanish Reina-Valera Revision.",
        source_url=f"{_SOURCE_ROOT}/es_rvr.json",
        color="#2196f3",
    ),
    TranslationDefinition(
        id="pt_nvi",
        name="Nova Versão Internacional (Português)",
        short_name="NVI",
        description="Portuguese NVI translation.",
        source_url=f"{_SOURCE_ROOT}/pt_nvi.json",
        color="#4caf50",
    ),
    TranslationDefinition(
        id="fr_apee",
        name="La Bible APEE (Français)",
        short_name="APEE",
        description="French APEE translation.",
        source_url=f"{_SOURCE_ROOT}/fr_apee.json",
        color="#f06292",
    ),
)

CANONICAL_TRANSLATION_ID = TRANSLATION_DEFINITIONS[0].id


def get_translation(translation_id: TranslationId) -> Optional[TranslationDefinition]:
    """Look up a translation definition by id."""
    for definition in TRANSLATION_DEFINITIONS:
        if definition.id == translation_id:
            return definition
    return None
