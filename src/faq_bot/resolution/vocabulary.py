"""
Keyword vocabulary for the keyword stage.

Curated synonym groups tie together words users mix freely ("phone",
"contact", "reach"), plus stop words that carry no matching signal.
Terms are stored normalized, so they can be written here in natural spelling.
"""
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set

from ..normalizer import normalize


DEFAULT_SYNONYM_GROUPS: Dict[str, List[str]] = {
    "contact": [
        "contact", "reach", "phone", "telephone", "call", "email", "mail",
        "kontakt", "kontakte", "telefon", "ringe", "ring",
    ],
    "recruiting": [
        "job", "jobs", "career", "careers", "hiring", "hire", "recruit",
        "recruiting", "recruitment", "apply", "application", "vacancy",
        "vacancies", "internship", "position", "stilling", "stillinger",
        "ansøgning", "ansøge", "praktik",
    ],
    "pricing": [
        "price", "prices", "pricing", "cost", "costs", "fee", "fees",
        "rate", "rates", "pris", "priser", "koster",
    ],
    "hours": [
        "hours", "open", "opening", "closing", "closed", "åbent",
        "åbningstid", "åbningstider", "lukket",
    ],
    "delivery": [
        "delivery", "deliver", "shipping", "ship", "levering", "fragt",
        "forsendelse",
    ],
}

DEFAULT_STOP_WORDS: FrozenSet[str] = frozenset({
    # English
    "what", "when", "where", "which", "who", "whom", "whose", "why", "how",
    "your", "yours", "their", "there", "this", "that", "these", "those",
    "have", "does", "with", "from", "about", "into", "would", "could",
    "should", "will", "please", "tell", "know", "want", "need", "they",
    # Danish
    "hvad", "hvor", "hvordan", "hvem", "hvilken", "hvilke", "hvorfor",
    "hvornaar", "jeres", "deres", "eller", "ikke", "have", "hvis", "gerne",
    "skal", "kan", "kunne", "ville", "med", "til", "fra", "om",
})


class KeywordVocabulary:
    """
    Synonym groups and stop words used to tokenize questions.

    Usage:
        vocabulary = KeywordVocabulary()
        tokens = vocabulary.tokenize("How do I contact you?", min_length=4)
        groups = vocabulary.groups_for(tokens)  # {"contact"}
    """

    def __init__(
        self,
        synonym_groups: Mapping[str, Iterable[str]] = None,
        stop_words: Iterable[str] = None,
    ):
        """
        :param synonym_groups: Group name -> member words (defaults to the curated set)
        :param stop_words: Words ignored unless they belong to a synonym group
        """
        if synonym_groups is None:
            synonym_groups = DEFAULT_SYNONYM_GROUPS
        if stop_words is None:
            stop_words = DEFAULT_STOP_WORDS

        self._term_groups: Dict[str, Set[str]] = {}
        for group, terms in synonym_groups.items():
            for term in terms:
                for word in normalize(term).split():
                    self._term_groups.setdefault(word, set()).add(group)

        self._stop_words = frozenset(normalize(word) for word in stop_words)

    def is_synonym(self, word: str) -> bool:
        return word in self._term_groups

    def tokenize(self, text: str, min_length: int = 4) -> Set[str]:
        """
        Extract matching tokens from text.

        Keeps normalized words of at least ``min_length`` characters that are
        not stop words, and every word belonging to a synonym group.
        """
        tokens = set()
        for word in normalize(text).split():
            if word in self._term_groups:
                tokens.add(word)
            elif len(word) >= min_length and word not in self._stop_words:
                tokens.add(word)
        return tokens

    def groups_for(self, tokens: Iterable[str]) -> Set[str]:
        """Names of the synonym groups any of the tokens belongs to."""
        groups: Set[str] = set()
        for token in tokens:
            groups.update(self._term_groups.get(token, ()))
        return groups
