# Path: spec_health/core/vocabulary.py
"""
Vocabulary for Spec Health Module

Immutable word lists used by the auditor and the sub-checks:
weasel phrases, banned vague verbs, negation cues, stop words,
log levels, HTTP methods, status phrases, error cues.

Loaded once from data/vocabulary.json and shared read-only by
every evaluation. Nothing mutates it after load.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config_loader import DEFAULT_VOCABULARY_PATH
from ..constants import LOG_INPUT


@dataclass(frozen=True)
class Vocabulary:
    """
    Read-only word lists.

    Attributes:
        weasel_phrases: Phrases that weaken a statement (L1)
        vague_verbs: Banned leading verbs for requirements (L3)
        negation_cues: Words/phrases that flip polarity
        requirement_subjects: Subjects stripped before reading a leading verb
        modal_verbs: Modals stripped before reading a leading verb
        stop_words: Words never treated as key nouns
        log_levels: Log-level keywords (S3)
        http_methods: Upper-case HTTP methods (C3)
        status_phrases: Named statuses in prose (S1)
        status_token_exclusions: Upper-case words that are not statuses
        error_cues: Words marking error-handling content (S4)
        limit_words: Words that introduce a threshold (S5)
        limit_units: Units that make a number a threshold (S5)
    """
    weasel_phrases: tuple[str, ...]
    vague_verbs: frozenset[str]
    negation_cues: tuple[str, ...]
    requirement_subjects: tuple[str, ...]
    modal_verbs: tuple[str, ...]
    stop_words: frozenset[str]
    log_levels: frozenset[str]
    http_methods: tuple[str, ...]
    status_phrases: tuple[str, ...]
    status_token_exclusions: frozenset[str]
    error_cues: tuple[str, ...]
    limit_words: tuple[str, ...]
    limit_units: tuple[str, ...]
    source: str = ''
    weasel_pattern: re.Pattern = field(init=False, repr=False, compare=False)
    negation_pattern: re.Pattern = field(init=False, repr=False, compare=False)
    status_pattern: re.Pattern = field(init=False, repr=False, compare=False)
    error_pattern: re.Pattern = field(init=False, repr=False, compare=False)
    limit_pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'weasel_pattern', _phrase_pattern(self.weasel_phrases))
        object.__setattr__(self, 'negation_pattern', _phrase_pattern(self.negation_cues))
        object.__setattr__(self, 'status_pattern', _phrase_pattern(self.status_phrases))
        object.__setattr__(self, 'error_pattern', _phrase_pattern(self.error_cues))
        object.__setattr__(self, 'limit_pattern', _limit_pattern(self.limit_words, self.limit_units))

    @classmethod
    def from_dict(cls, data: dict, source: str = '') -> 'Vocabulary':
        """Build vocabulary from the parsed JSON payload."""
        def _list(key: str) -> list[str]:
            return [str(item).strip().lower() for item in data.get(key, []) if str(item).strip()]

        return cls(
            weasel_phrases=tuple(_list('weasel_phrases')),
            vague_verbs=frozenset(_list('vague_verbs')),
            negation_cues=tuple(_longest_first(_list('negation_cues'))),
            requirement_subjects=tuple(_longest_first(_list('requirement_subjects'))),
            modal_verbs=tuple(_longest_first(_list('modal_verbs'))),
            stop_words=frozenset(_list('stop_words')),
            log_levels=frozenset(_list('log_levels')),
            http_methods=tuple(str(m).strip().upper() for m in data.get('http_methods', [])),
            status_phrases=tuple(_list('status_phrases')),
            status_token_exclusions=frozenset(
                str(t).strip().upper() for t in data.get('status_token_exclusions', [])
            ),
            error_cues=tuple(_longest_first(_list('error_cues'))),
            limit_words=tuple(_longest_first(_list('limit_words'))),
            limit_units=tuple(_longest_first(_list('limit_units'))),
            source=source,
        )


def _longest_first(items: list[str]) -> list[str]:
    return sorted(dict.fromkeys(items), key=lambda item: (-len(item), item))


def _phrase_pattern(phrases) -> re.Pattern:
    """
    Compile an alternation that matches whole phrases only.

    A phrase ending in punctuation (e.g. 'etc.') only needs a word
    boundary at its start.
    """
    parts = []
    for phrase in _longest_first(list(phrases)):
        escaped = re.escape(phrase).replace("'", "['’]")
        tail = r'\b' if phrase[-1].isalnum() else ''
        parts.append(rf'\b{escaped}{tail}')
    if not parts:
        return re.compile(r'(?!x)x')
    return re.compile('|'.join(parts), re.IGNORECASE)


def _limit_pattern(limit_words, limit_units) -> re.Pattern:
    """
    Compile the numeric threshold matcher.

    Matches a number with a unit ('30s', '5 retries', '99.9%'),
    a limit word shortly followed by a number ('max 3', 'timeout of 10'),
    or a comparison against a number ('>= 100').
    """
    units = '|'.join(
        re.escape(unit) + (r'\b' if unit[-1].isalnum() else '')
        for unit in _longest_first(list(limit_units))
    ) or r'(?!x)x'
    words = '|'.join(re.escape(word) for word in _longest_first(list(limit_words))) or r'(?!x)x'
    return re.compile(
        rf'\b\d+(?:[.,]\d+)?\s*(?:{units})'
        rf'|\b(?:{words})\b\W+(?:[a-z]+\W+){{0,3}}?\d'
        r'|[<>≤≥]=?\s*\d',
        re.IGNORECASE,
    )


# ==============================================================================
# INIT-ONCE LOADER
# ==============================================================================

_VOCABULARIES: dict[Path, Vocabulary] = {}


def load_vocabulary(path: Optional[Path] = None) -> Vocabulary:
    """
    Load vocabulary from JSON, once per path.

    Args:
        path: Vocabulary file (bundled data/vocabulary.json if None)

    Returns:
        Shared immutable Vocabulary

    Raises:
        FileNotFoundError: If the vocabulary file does not exist
    """
    resolved = Path(path or DEFAULT_VOCABULARY_PATH).resolve()

    cached = _VOCABULARIES.get(resolved)
    if cached is not None:
        return cached

    if not resolved.exists():
        raise FileNotFoundError(f"Vocabulary file not found: {resolved}")

    logger = logging.getLogger('input.vocabulary')
    logger.info(f"{LOG_INPUT} Loading vocabulary from {resolved}")

    with open(resolved, 'r', encoding='utf-8') as f:
        data = json.load(f)

    vocabulary = Vocabulary.from_dict(data, source=str(resolved))
    _VOCABULARIES[resolved] = vocabulary
    return vocabulary


__all__ = ['Vocabulary', 'load_vocabulary']
