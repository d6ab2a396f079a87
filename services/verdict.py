# services/verdict.py
"""Turn a model reply into a Post / Tweak / Nah verdict.

The model is asked for JSON, but replies come back fenced, wrapped in prose,
or as plain sentences. Parsing tries JSON first, then keyword heuristics, and
synthesizes a placeholder verdict when there is no text at all.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from schemas import DisplayVerdict
from services.utils import extract_json_object, strip_code_fences
from services.vibes import VibeKey

logger = logging.getLogger(__name__)

MAX_REASONS = 4
POST_PROBABILITY = 0.7

POSITIVE_WORDS = (
    "good", "nice", "aesthetic", "beautiful", "great", "amazing", "positive",
    "lovely", "stylish", "cute", "stunning", "fire", "lit",
)

DEFAULT_SUGGESTIONS = {
    DisplayVerdict.POST: "Looks good, maybe minor lighting or crop tweaks.",
    DisplayVerdict.TWEAK: "Almost there, fix the small stuff and it's ready.",
    DisplayVerdict.NAH: "Try brighter lighting or a clearer background.",
    DisplayVerdict.ERROR: "Could not analyze image. Please try again.",
}

# canned (positive, negative) suggestions used when there is no model output
FALLBACK_SUGGESTIONS: Dict[VibeKey, Tuple[List[str], List[str]]] = {
    VibeKey.GENERAL: (
        ["Looking good!", "Great photo quality"],
        ["Try brighter lighting", "Clean up the background"],
    ),
    VibeKey.AESTHETIC: (
        ["Perfect lighting and composition!", "This fits the aesthetic perfectly"],
        ["Try softer lighting", "Add more visual elements"],
    ),
    VibeKey.CLASSY_CORE: (
        ["Elegant and sophisticated", "Great for professional posts"],
        ["Consider more neutral colors", "Clean up the background"],
    ),
    VibeKey.RIZZ_CORE: (
        ["Confident energy detected!", "This will definitely get attention"],
        ["Work on your pose", "Better angle needed"],
    ),
    VibeKey.MATCHA_CORE: (
        ["Calm and serene vibes", "Perfect for mindful content"],
        ["Add more green tones", "Softer, more natural lighting"],
    ),
    VibeKey.BAD_BIH_VIBE: (
        ["Bold and fierce energy!", "Confidence is on point"],
        ["Step up your outfit game", "More dramatic lighting"],
    ),
}

_DISPLAY_LABELS = {v.value for v in DisplayVerdict}


@dataclass(frozen=True)
class Verdict:
    label: str
    comment: str
    reasons: List[str] = field(default_factory=list)
    score: Optional[float] = None
    degraded: bool = False


def map_verdict_to_ui(verdict_raw: Any) -> str:
    """Map a model verdict like "POST IT" to its display label.

    Unknown labels are returned unchanged.
    """
    raw = "" if verdict_raw is None else str(verdict_raw)
    v = raw.strip().upper()
    if v == "POST IT":
        return DisplayVerdict.POST.value
    if v == "TWEAK IT":
        return DisplayVerdict.TWEAK.value
    if v == "NAH":
        return DisplayVerdict.NAH.value
    if "POST" in v:
        return DisplayVerdict.POST.value
    if "NAH" in v:
        return DisplayVerdict.NAH.value
    if "TWEAK" in v:
        return DisplayVerdict.TWEAK.value
    return raw


def keyword_verdict(text: str) -> str:
    lower = (text or "").lower()
    if "nah" in lower:
        return DisplayVerdict.NAH.value
    if "post" in lower:
        return DisplayVerdict.POST.value
    if any(w in lower for w in POSITIVE_WORDS):
        return DisplayVerdict.POST.value
    return DisplayVerdict.NAH.value


def _coerce_reasons(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    reasons = [str(r).strip() for r in value if r is not None and str(r).strip()]
    return reasons[:MAX_REASONS]


def _coerce_score(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    if score != score:  # NaN
        return None
    return round(min(max(score, 0.0), 10.0), 1)


def synthesize_fallback(vibe: VibeKey = VibeKey.GENERAL, rng: Optional[random.Random] = None) -> Verdict:
    """Placeholder verdict for when the model produced no text at all."""
    rng = rng or random.Random()
    positive, negative = FALLBACK_SUGGESTIONS.get(vibe, FALLBACK_SUGGESTIONS[VibeKey.GENERAL])
    if rng.random() < POST_PROBABILITY:
        label, candidates = DisplayVerdict.POST.value, positive
    else:
        label, candidates = DisplayVerdict.NAH.value, negative
    return Verdict(label=label, comment=rng.choice(candidates), degraded=True)


def parse_verdict(text: Optional[str], vibe: VibeKey = VibeKey.GENERAL, rng: Optional[random.Random] = None) -> Verdict:
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        logger.warning("Empty model reply, using placeholder verdict for vibe=%s", vibe.value)
        return synthesize_fallback(vibe, rng)

    parsed = extract_json_object(cleaned)
    if parsed and (parsed.get("verdict") or parsed.get("comment")):
        verdict_raw = parsed.get("verdict") or ""
        comment = str(parsed.get("comment") or "").strip()
        label = map_verdict_to_ui(verdict_raw)
        if label not in _DISPLAY_LABELS:
            label = keyword_verdict(f"{verdict_raw} {comment}")
        return Verdict(
            label=label,
            comment=comment or DEFAULT_SUGGESTIONS[DisplayVerdict(label)],
            reasons=_coerce_reasons(parsed.get("reasons")),
            score=_coerce_score(parsed.get("score")),
        )

    logger.info("Model reply had no usable JSON, falling back to keywords")
    return Verdict(label=keyword_verdict(cleaned), comment=cleaned)
