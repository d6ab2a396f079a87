# services/vibes.py
import re
from enum import Enum
from typing import Optional


class VibeKey(str, Enum):
    GENERAL = "general"
    AESTHETIC = "aesthetic"
    CLASSY_CORE = "classyCore"
    RIZZ_CORE = "rizzCore"
    MATCHA_CORE = "matchaCore"
    BAD_BIH_VIBE = "badBihVibe"


# keys are lower-case, letters only
_ALIASES = {
    "general": VibeKey.GENERAL,
    "generalvibe": VibeKey.GENERAL,
    "igstory": VibeKey.GENERAL,
    "igstoryvibe": VibeKey.GENERAL,
    "aesthetic": VibeKey.AESTHETIC,
    "aestheticvibe": VibeKey.AESTHETIC,
    "aestheticcore": VibeKey.AESTHETIC,
    "classy": VibeKey.CLASSY_CORE,
    "classycore": VibeKey.CLASSY_CORE,
    "rizz": VibeKey.RIZZ_CORE,
    "rizzcore": VibeKey.RIZZ_CORE,
    "matcha": VibeKey.MATCHA_CORE,
    "matchacore": VibeKey.MATCHA_CORE,
    "badbih": VibeKey.BAD_BIH_VIBE,
    "badbihvibe": VibeKey.BAD_BIH_VIBE,
    "baddie": VibeKey.BAD_BIH_VIBE,
}

_NON_LETTERS = re.compile(r"[^a-z]")


def normalize_vibe_key(category: Optional[str] = None) -> VibeKey:
    """Map a free-text category label to a VibeKey.

    Only the first entry of a comma-joined list counts. Anything that does not
    match an alias falls back to ``VibeKey.GENERAL``.
    """
    if not category or not isinstance(category, str):
        return VibeKey.GENERAL
    first = category.split(",")[0]
    key = _NON_LETTERS.sub("", first.lower())
    return _ALIASES.get(key, VibeKey.GENERAL)
