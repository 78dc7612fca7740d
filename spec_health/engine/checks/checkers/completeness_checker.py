# Path: spec_health/engine/checks/checkers/completeness_checker.py
"""
Completeness Checker

C1-C5: are the sections there, and do the load-bearing ones hold
real content rather than template scaffolding?
"""

import re

from ....constants import (
    AXIS_COMPLETENESS,
    SECTION_TITLES,
    SECTION_API_CONTRACT,
    SECTION_REFERENCE_IMPLEMENTATION,
)
from ....core.vocabulary import Vocabulary
from ....loaders.markdown_blocks import CLARIFICATION_PATTERN
from ....models.document import Document
from ..core.check_result import SubCheck, ratio
from ..core.constants import (
    CHECK_SECTIONS_FILLED,
    CHECK_DATA_MODEL_ENTITY,
    CHECK_API_CONTRACT,
    CHECK_FILE_PATHS,
    CHECK_REFERENCE_IMPLEMENTATION,
    SECTION_COUNT,
)


# 'src/payments/refund.py', './config/app.yaml'
PATH_PATTERN = re.compile(r'(?:[\w.\-]+/)+[\w.\-]*\.\w{1,8}\b')

# 'N/A — no external interface', 'N/A: internal only'
NOT_APPLICABLE_PATTERN = re.compile(
    r'\bN/A\b\s*(?:[—–:\-(,]|because\b|since\b|as\b)\s*\w+',
    re.IGNORECASE,
)

TBD_PATTERN = re.compile(r'\bTBD\b', re.IGNORECASE)


class CompletenessChecker:
    """
    Completeness axis sub-checks.

    Example:
        checker = CompletenessChecker(vocabulary)
        for sub_check in checker.check_all(document):
            print(sub_check.id, sub_check.score)
    """

    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary
        methods = '|'.join(re.escape(method) for method in vocabulary.http_methods)
        self._endpoint_pattern = re.compile(rf'\b(?:{methods})\s+/\S*', re.IGNORECASE)

    def check_all(self, document: Document) -> list[SubCheck]:
        return [
            self.check_sections_filled(document),
            self.check_data_model_entity(document),
            self.check_api_contract(document),
            self.check_file_paths(document),
            self.check_reference_implementation(document),
        ]

    def check_sections_filled(self, document: Document) -> SubCheck:
        """C1: filled counted sections / 13."""
        filled = document.filled_counted_sections()
        missing = [SECTION_TITLES[key] for key in document.missing_counted_sections()]
        detail = f"{len(filled)}/{SECTION_COUNT} sections filled"
        if missing:
            detail += f"; missing or empty: {', '.join(missing)}"
        return SubCheck(CHECK_SECTIONS_FILLED, AXIS_COMPLETENESS, ratio(len(filled), SECTION_COUNT), detail)

    def check_data_model_entity(self, document: Document) -> SubCheck:
        """C2: an entity with at least one property."""
        described = [entity.name for entity in document.data_entities if entity.properties]
        if described:
            return SubCheck(
                CHECK_DATA_MODEL_ENTITY, AXIS_COMPLETENESS, 1.0,
                f"{len(described)} entities with properties (e.g. {described[0]})",
            )
        return SubCheck(CHECK_DATA_MODEL_ENTITY, AXIS_COMPLETENESS, 0.0, 'no entity with listed properties')

    def check_api_contract(self, document: Document) -> SubCheck:
        """C3: a 'METHOD /path' token or 'N/A' with a reason."""
        body = document.section(SECTION_API_CONTRACT).body
        endpoint = self._endpoint_pattern.search(body)
        if endpoint:
            return SubCheck(CHECK_API_CONTRACT, AXIS_COMPLETENESS, 1.0, f"endpoint '{endpoint.group(0)}'")
        if NOT_APPLICABLE_PATTERN.search(body):
            return SubCheck(CHECK_API_CONTRACT, AXIS_COMPLETENESS, 1.0, 'N/A with reason')
        return SubCheck(CHECK_API_CONTRACT, AXIS_COMPLETENESS, 0.0, 'no endpoint and no justified N/A')

    def check_file_paths(self, document: Document) -> SubCheck:
        """C4: a Files bullet holds a path-like token."""
        for entry in document.file_entries:
            match = PATH_PATTERN.search(entry.text)
            if match:
                return SubCheck(CHECK_FILE_PATHS, AXIS_COMPLETENESS, 1.0, f"path '{match.group(0)}'")
        return SubCheck(
            CHECK_FILE_PATHS, AXIS_COMPLETENESS, 0.0,
            f"{len(document.file_entries)} file entries, none with a path",
        )

    def check_reference_implementation(self, document: Document) -> SubCheck:
        """C5: Reference Implementation filled and not a placeholder."""
        section = document.section(SECTION_REFERENCE_IMPLEMENTATION)
        if not section.is_filled:
            return SubCheck(CHECK_REFERENCE_IMPLEMENTATION, AXIS_COMPLETENESS, 0.0, 'section missing or empty')
        body = section.body
        if '{' in body or TBD_PATTERN.search(body) or CLARIFICATION_PATTERN.search(body):
            return SubCheck(CHECK_REFERENCE_IMPLEMENTATION, AXIS_COMPLETENESS, 0.0, 'placeholder path')
        return SubCheck(CHECK_REFERENCE_IMPLEMENTATION, AXIS_COMPLETENESS, 1.0, 'concrete reference')


__all__ = ['CompletenessChecker']
