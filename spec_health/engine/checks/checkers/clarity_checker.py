# Path: spec_health/engine/checks/checkers/clarity_checker.py
"""
Clarity Checker

L1-L4: weasel phrases, open clarification markers, vague requirement
verbs and non-committal decision conditions.

L1 counts weasel phrases anywhere in the rendered document, including
text inside clarification markers.
"""

import re

from ....constants import AXIS_CLARITY
from ....core.keyword_matcher import KeywordMatcher
from ....core.vocabulary import Vocabulary
from ....loaders.markdown_blocks import normalize_whitespace
from ....models.document import Document, DecisionTreeNode
from ..core.check_result import SubCheck
from ..core.constants import (
    CHECK_WEASEL_PHRASES,
    CHECK_CLARIFICATION_MARKERS,
    CHECK_VAGUE_VERBS,
    CHECK_DECISION_CONDITIONS,
    WEASEL_PENALTY,
    MARKER_PENALTY,
    IT_DEPENDS,
)


# A bare line reads as a condition when it asks or branches
CONDITION_LEAD_PATTERN = re.compile(
    r'^(?:if|when|whenever|unless|else|otherwise|is|are|does|do|has|have|can)\b',
    re.IGNORECASE,
)


class ClarityChecker:
    """
    Clarity axis sub-checks.

    Example:
        checker = ClarityChecker(vocabulary, KeywordMatcher(vocabulary))
        l1 = checker.check_weasel_phrases(document)
    """

    def __init__(self, vocabulary: Vocabulary, matcher: KeywordMatcher):
        self.vocabulary = vocabulary
        self.matcher = matcher

    def check_all(self, document: Document) -> list[SubCheck]:
        return [
            self.check_weasel_phrases(document),
            self.check_clarification_markers(document),
            self.check_vague_verbs(document),
            self.check_decision_conditions(document),
        ]

    def count_weasel_phrases(self, text: str) -> int:
        """Weasel phrase occurrences anywhere in text."""
        return len(self.vocabulary.weasel_pattern.findall(normalize_whitespace(text)))

    def check_weasel_phrases(self, document: Document) -> SubCheck:
        """L1 = max(0, 1 - 0.1 x weasel phrases)."""
        count = self.count_weasel_phrases(document.render())
        return SubCheck(
            CHECK_WEASEL_PHRASES, AXIS_CLARITY,
            max(0.0, 1.0 - WEASEL_PENALTY * count),
            f"{count} weasel phrases",
        )

    def check_clarification_markers(self, document: Document) -> SubCheck:
        """L2 = max(0, 1 - 0.15 x markers)."""
        count = len(document.clarification_markers)
        return SubCheck(
            CHECK_CLARIFICATION_MARKERS, AXIS_CLARITY,
            max(0.0, 1.0 - MARKER_PENALTY * count),
            f"{count} clarification markers",
        )

    def check_vague_verbs(self, document: Document) -> SubCheck:
        """L3: no requirement leads with handle/process/manage."""
        vague = [
            requirement for requirement in document.requirements
            if self.matcher.verb_in(requirement.leading_verb, self.vocabulary.vague_verbs)
        ]
        if vague:
            verbs = sorted({requirement.leading_verb for requirement in vague})
            return SubCheck(
                CHECK_VAGUE_VERBS, AXIS_CLARITY, 0.0,
                f"{len(vague)} requirements lead with {', '.join(verbs)}",
            )
        return SubCheck(
            CHECK_VAGUE_VERBS, AXIS_CLARITY, 1.0,
            f"{len(document.requirements)} requirements, no vague verbs",
        )

    def check_decision_conditions(self, document: Document) -> SubCheck:
        """L4: a branch condition other than 'it depends'."""
        nodes = document.decision_nodes()
        real = [node for node in nodes if self.is_real_condition(node)]
        if real:
            return SubCheck(
                CHECK_DECISION_CONDITIONS, AXIS_CLARITY, 1.0,
                f"{len(real)} branch conditions",
            )
        if any(_normalized_condition(node).startswith(IT_DEPENDS) for node in nodes):
            return SubCheck(CHECK_DECISION_CONDITIONS, AXIS_CLARITY, 0.0, "only 'it depends'")
        return SubCheck(CHECK_DECISION_CONDITIONS, AXIS_CLARITY, 0.0, 'no branch conditions')

    @staticmethod
    def is_real_condition(node: DecisionTreeNode) -> bool:
        condition = _normalized_condition(node)
        if not condition or condition.startswith(IT_DEPENDS):
            return False
        if node.children or node.outcome:
            return True
        return bool(CONDITION_LEAD_PATTERN.match(condition)) or node.condition.rstrip().endswith('?')


def _normalized_condition(node: DecisionTreeNode) -> str:
    return normalize_whitespace(re.sub(r'[^\w\s]', ' ', node.condition.lower()))


__all__ = ['ClarityChecker']
