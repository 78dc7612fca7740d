# Path: spec_health/core/keyword_matcher.py
"""
Keyword Matcher

Deterministic token-level text comparison used by the extractor,
the consistency auditor and the sub-checks.

KEY NOUNS:
Lower-cased alphanumeric words of 4+ characters that are neither stop
words nor negation cues, reduced by a light suffix stem so that
'tokens'/'token' and 'logged'/'logging'/'logs' compare equal.

No semantic judgment happens here: two texts "share key nouns" when
their key-noun sets intersect.
"""

import re
from typing import Iterable

from .vocabulary import Vocabulary


WORD_PATTERN = re.compile(r'[a-z0-9]+')
VOWELS = set('aeiou')

MIN_KEY_NOUN_LENGTH = 4
MIN_STEM_LENGTH = 3


def stem(word: str) -> str:
    """
    Light suffix stemmer.

    Strips -ies/-ing/-ed/-es/-s, a trailing 'e' and a doubled final
    consonant. Never shortens below three characters.

    Example:
        stem('retries') -> 'retry'
        stem('logging') -> 'log'
        stem('stored') == stem('store') == 'stor'
    """
    word = word.lower()
    if word.endswith('ies') and len(word) - 3 >= MIN_STEM_LENGTH - 1:
        word = word[:-3] + 'y'
    else:
        for suffix in ('ing', 'ed', 'es'):
            if word.endswith(suffix) and len(word) - len(suffix) >= MIN_STEM_LENGTH:
                word = word[:-len(suffix)]
                break
        else:
            if (word.endswith('s') and not word.endswith(('ss', 'us', 'is'))
                    and len(word) - 1 >= MIN_STEM_LENGTH):
                word = word[:-1]

    if word.endswith('e') and len(word) - 1 >= MIN_STEM_LENGTH:
        word = word[:-1]
    if (len(word) > MIN_STEM_LENGTH and word[-1] == word[-2]
            and word[-1] not in VOWELS and word[-1].isalpha()):
        word = word[:-1]
    return word


class KeywordMatcher:
    """
    Key-noun extraction and lead-in stripping over a Vocabulary.

    Example:
        matcher = KeywordMatcher(load_vocabulary())
        matcher.key_nouns('NEVER log access tokens')   # {'acces', 'token'}
        matcher.leading_verb('The system must handle retries')  # 'handle'
    """

    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary
        single_word_cues = {cue for cue in vocabulary.negation_cues if ' ' not in cue}
        self._excluded = (
            set(vocabulary.stop_words)
            | single_word_cues
            | {modal for modal in vocabulary.modal_verbs if ' ' not in modal}
        )
        self._lead_ins = _lead_in_pattern(
            list(vocabulary.requirement_subjects)
            + list(vocabulary.modal_verbs)
            + list(vocabulary.negation_cues)
            + ['to', 'and', 'also', 'always']
        )

    # --------------------------------------------------------------------------
    # KEY NOUNS
    # --------------------------------------------------------------------------

    def key_nouns(self, text: str) -> frozenset[str]:
        """Stemmed content tokens of text."""
        nouns = set()
        for word in WORD_PATTERN.findall(text.lower().replace('’', "'")):
            if len(word) < MIN_KEY_NOUN_LENGTH or word.isdigit():
                continue
            if word in self._excluded:
                continue
            nouns.add(stem(word))
        return frozenset(nouns)

    def shares_key_nouns(self, first: str, second: str) -> bool:
        return bool(self.key_nouns(first) & self.key_nouns(second))

    def overlap(self, first: str, second: str) -> frozenset[str]:
        return self.key_nouns(first) & self.key_nouns(second)

    # --------------------------------------------------------------------------
    # POLARITY AND VERBS
    # --------------------------------------------------------------------------

    def has_negation(self, text: str) -> bool:
        return bool(self.vocabulary.negation_pattern.search(text))

    def strip_lead_in(self, text: str) -> str:
        """
        Remove leading subjects, modals and negation cues.

        'The system must never log tokens' -> 'log tokens'
        """
        remainder = re.sub(r'^[\W_]+', '', text)
        while True:
            match = self._lead_ins.match(remainder)
            if not match:
                break
            remainder = re.sub(r'^[\W_]+', '', remainder[match.end():])
        return remainder.strip()

    def leading_verb(self, text: str) -> str:
        """First word after subjects, modals and negation cues, lower-cased."""
        words = WORD_PATTERN.findall(self.strip_lead_in(text).lower())
        return words[0] if words else ''

    def verbs_equal(self, first: str, second: str) -> bool:
        """Same verb, inflections included."""
        if not first or not second:
            return False
        return first == second or stem(first) == stem(second)

    def verb_in(self, verb: str, verbs: Iterable[str]) -> bool:
        return any(self.verbs_equal(verb, candidate) for candidate in verbs)

    def object_nouns(self, text: str) -> frozenset[str]:
        """Key nouns of the text that follows the leading verb."""
        stripped = self.strip_lead_in(text)
        match = WORD_PATTERN.search(stripped.lower())
        if not match:
            return frozenset()
        return self.key_nouns(stripped[match.end():])


def _lead_in_pattern(phrases: list[str]) -> re.Pattern:
    ordered = sorted(set(p.strip().lower() for p in phrases if p.strip()), key=lambda p: (-len(p), p))
    alternation = '|'.join(re.escape(p).replace("'", "['’]") for p in ordered)
    return re.compile(rf'(?:{alternation})\b', re.IGNORECASE)


__all__ = ['KeywordMatcher', 'stem']
