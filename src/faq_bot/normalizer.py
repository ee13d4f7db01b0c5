"""
Text canonicalization for question matching.

Everything compared by the resolution stages goes through ``normalize`` first,
so two questions that differ only in case, accents, punctuation or spacing
compare equal.
"""
import re
import unicodedata

# Letters that survive NFKD decomposition unchanged (æ, ø) or that must be
# spelled out rather than stripped (å -> aa, not a).
_NORDIC_FOLDS = (
    ("æ", "ae"),
    ("ø", "oe"),
    ("å", "aa"),
    ("ð", "d"),
    ("þ", "th"),
)

_NON_WORD_RE = re.compile(r"[\W_]+")


def _fold_nordic(text: str) -> str:
    for source, target in _NORDIC_FOLDS:
        text = text.replace(source, target)
    return text


def normalize(text: str) -> str:
    """
    Canonicalize text for comparison.

    Lower-cases, folds Nordic letters, strips diacritics, turns punctuation
    into spaces and collapses whitespace. Idempotent.

    :param text: Raw text (None is treated as empty)
    :return: Normalized text, possibly empty
    """
    if not text:
        return ""

    text = _fold_nordic(unicodedata.normalize("NFC", text).lower())
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    # Compatibility decomposition can reintroduce capitals and æ/ø (e.g. "℡", "ᴭ")
    text = _fold_nordic(text.lower())
    text = _NON_WORD_RE.sub(" ", text)
    return text.strip()
