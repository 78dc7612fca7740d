# Path: spec_health/loaders/section_extractor.py
"""
Section Extractor for Spec Health Module

Parses raw specification text into a Document.

RESPONSIBILITY: Split text into sections by ATX heading, recognize the
canonical sections by alias, and derive the structured views the
auditor and checks consume (prohibitions, requirements, acceptance
criteria, decision tree, domain rule rows, files, data entities,
scope parts, clarification markers, conventions).

TOLERANCE:
Parsing never raises. Unknown headings become unrecognized sections,
missing canonical sections become empty placeholders, and lines that
match no construct are kept as plain text.
"""

import logging
import re
from typing import Iterator, Optional

from ..constants import (
    LOG_INPUT,
    SECTION_ALIASES,
    SCOPE_SUBHEADING_ALIASES,
    SECTION_SCOPE,
    SECTION_PROHIBITIONS,
    SECTION_REQUIREMENTS,
    SECTION_ACCEPTANCE_CRITERIA,
    SECTION_DECISION_TREE,
    SECTION_DOMAIN_RULES,
    SECTION_FILES,
    SECTION_DATA_MODEL,
    SECTION_CODEBASE_CONTEXT,
    SCOPE_IN,
    SCOPE_OUT,
    SCOPE_DEFERRED,
    CATEGORY_HAPPY_PATH,
    CATEGORY_NEGATIVE,
    CATEGORY_EDGE_CASE,
    CATEGORY_RESILIENCE,
)
from ..core.keyword_matcher import KeywordMatcher
from ..core.vocabulary import Vocabulary, load_vocabulary
from ..models.document import (
    AcceptanceCriterion,
    Bullet,
    DataEntity,
    DecisionTreeNode,
    Document,
    Prohibition,
    Requirement,
    Section,
)
from .markdown_blocks import (
    ARROW_PATTERN,
    TREE_GLYPHS,
    find_clarification_markers,
    is_code_fence,
    is_table_row,
    is_table_separator,
    normalize_heading,
    normalize_whitespace,
    parse_bullet,
    parse_heading,
    parse_label,
    remove_placeholders,
    split_identifier,
    split_table_row,
    strip_emphasis,
)


# ==============================================================================
# PATTERNS
# ==============================================================================

TEST_REF_PATTERN = re.compile(
    r'\(\s*(?:negative\s+)?(?:tests?|verified\s+by|covered\s+by|see)\s*[:=]?\s*'
    r'([A-Za-z][\w.\-]*)\s*\)',
    re.IGNORECASE,
)

# Rationale follows an em dash or 'because'
RATIONALE_PATTERN = re.compile(r'\s*—\s*|\s*\bbecause\b\s*', re.IGNORECASE)

CHILD_RATIONALE_PATTERN = re.compile(r'^(?:because|why|rationale|reason)\b', re.IGNORECASE)

INLINE_CATEGORY_PATTERN = re.compile(
    r'^(?:\[([^\]]+)\]\s*:?|\*\*([^*]+?)\*\*\s*:?|_([^_]+)_\s*:|([A-Za-z][A-Za-z \-]{1,24}):)\s*'
)

CONVENTION_PATTERN = re.compile(r"\b(?:don['’]t|do\s+not)\s+use\s*:\s*(.+)$", re.IGNORECASE)

CODE_ENTITY_PATTERN = re.compile(
    r'^(?:export\s+)?(?:class|interface|type|struct|model|message|enum|record|'
    r'create\s+table(?:\s+if\s+not\s+exists)?)\s+[`"]?([A-Za-z_][\w.]*)',
    re.IGNORECASE,
)

INLINE_ENTITY_PATTERN = re.compile(
    r'^(?:\*\*([^*]+?)\*\*|`([^`]+)`|([A-Z][A-Za-z0-9_]*))\s*(?::\s*(\S.*)|\{\s*([^}]*)\}?)\s*$'
)

SCOPE_OUT_PATTERN = re.compile(r'^(?:out\b|out-of-scope|non-goals?\b|not\s+in\s+scope|excluded)')
SCOPE_DEFERRED_PATTERN = re.compile(r'^(?:deferred|later\b|future\b|phase\s*2)')

STATUS_TOKEN_PATTERN = re.compile(r'\b[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+\b|\b[A-Z]{4,}\b')

QUOTED_PATTERN = re.compile(r'"[^"\n]+"|“[^”\n]+”|`[^`\n]+`|(?<!\w)\'[^\'\n]+\'(?!\w)')

PURE_IDENTIFIER_PATTERN = re.compile(r'^[A-Z]{1,5}(?:-[A-Z]{1,5})?-?\d+[a-z]?$')

CODE_CLOSERS = {'{', '}', '};', '});', ')', ');', '];', ']'}


def extract_conventions(text: str) -> list[str]:
    """
    Collect 'Don't use: X' entries from plain text.

    Args:
        text: Codebase Context body or a project rules file

    Returns:
        Convention subjects (X), in order, duplicates removed
    """
    entries: list[str] = []
    for line in text.splitlines():
        match = CONVENTION_PATTERN.search(line)
        if not match:
            continue
        entry = strip_emphasis(match.group(1)).strip(' .;,')
        if entry and entry not in entries:
            entries.append(entry)
    return entries


class SectionExtractor:
    """
    Parses specification markdown into a Document.

    Example:
        extractor = SectionExtractor()
        document = extractor.extract(text, name='checkout')
        for prohibition in document.prohibitions:
            print(prohibition.action, prohibition.rationale)
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        """Initialize section extractor."""
        self.logger = logging.getLogger('input.section_extractor')
        self.vocabulary = vocabulary or load_vocabulary()
        self.matcher = KeywordMatcher(self.vocabulary)
        self._aliases = sorted(
            ((alias, key) for key, aliases in SECTION_ALIASES.items() for alias in aliases),
            key=lambda pair: (-len(pair[0]), pair[0]),
        )

    # --------------------------------------------------------------------------
    # SECTIONING
    # --------------------------------------------------------------------------

    def extract(self, text: str, name: str = 'document') -> Document:
        """
        Parse text into a Document.

        Args:
            text: Raw specification markdown
            name: Document name for reports

        Returns:
            Document with sections and derived views
        """
        document = Document(name=name)
        current = Section(key=None, title='', level=0)
        document.sections.append(current)
        in_fence = False

        for line in (text or '').splitlines():
            if is_code_fence(line):
                in_fence = not in_fence
                current.lines.append(line)
                continue
            heading = None if in_fence else parse_heading(line)
            if heading is None:
                current.lines.append(line)
                continue

            level, title = heading
            key = self.match_section(title)

            if current.key is not None and level > current.level:
                # Deeper headings are sub-headings unless they open a new canonical section
                if key is None or key == current.key or key in document.index:
                    current.lines.append(line)
                    continue

            if key is None:
                current = Section(key=None, title=title, level=level, heading=line)
                document.sections.append(current)
                continue

            existing = document.index.get(key)
            if existing is not None:
                existing.lines.append(line)
                current = existing
                continue

            current = Section(key=key, title=title, level=level, heading=line)
            document.sections.append(current)
            document.index[key] = current

        self.index(document)

        self.logger.info(
            f"{LOG_INPUT} Extracted '{name}': {len(document.index)} canonical sections, "
            f"{len(document.prohibitions)} prohibitions, "
            f"{len(document.acceptance_criteria)} acceptance criteria"
        )
        return document

    def match_section(self, title: str) -> Optional[str]:
        """
        Resolve a heading to its canonical key.

        Args:
            title: Heading text as written

        Returns:
            Canonical section key or None
        """
        normalized = normalize_heading(title)
        for alias, key in self._aliases:
            if normalized == alias:
                return key
            if normalized.startswith(alias) and not normalized[len(alias)].isalnum():
                return key
        return None

    # --------------------------------------------------------------------------
    # STRUCTURED VIEWS
    # --------------------------------------------------------------------------

    def index(self, document: Document) -> Document:
        """
        Re-derive every structured view from section lines.

        Called after extraction and again after any mutation of
        section lines (self-repair).

        Args:
            document: Document to index in place

        Returns:
            The same document
        """
        document.index = {}
        for section in document.sections:
            section.bullets, section.tables = self._collect_blocks(section)
            if section.key is not None:
                document.index.setdefault(section.key, section)

        document.scope_items = self._scope_items(document.section(SECTION_SCOPE))
        document.prohibitions = self._prohibitions(document.section(SECTION_PROHIBITIONS))
        document.requirements = self._requirements(document.section(SECTION_REQUIREMENTS))
        document.acceptance_criteria = self._acceptance_criteria(
            document.section(SECTION_ACCEPTANCE_CRITERIA)
        )
        document.decision_tree = self._decision_tree(document.section(SECTION_DECISION_TREE))

        domain_rules = document.section(SECTION_DOMAIN_RULES)
        document.domain_rules_table = bool(domain_rules.tables)
        document.domain_rule_rows = [
            row for row in domain_rules.table_body_rows if any(cell for cell in row)
        ]

        document.file_entries = self._file_entries(document.section(SECTION_FILES))
        document.data_entities = self._data_entities(document.section(SECTION_DATA_MODEL))
        document.clarification_markers = find_clarification_markers(document.render())
        document.conventions = extract_conventions(
            document.section(SECTION_CODEBASE_CONTEXT).body
        )
        return document

    def _collect_blocks(self, section: Section) -> tuple[list[Bullet], list[list[list[str]]]]:
        """Bullets and tables of a section body (code fences skipped)."""
        bullets: list[Bullet] = []
        tables: list[list[list[str]]] = []
        table: Optional[list[list[str]]] = None
        category = self._initial_category(section)
        in_fence = False

        for line_no, line in enumerate(section.lines):
            if is_code_fence(line):
                in_fence = not in_fence
                table = None
                continue
            if in_fence:
                continue

            if is_table_row(line):
                cells = split_table_row(line)
                if is_table_separator(cells):
                    continue
                if table is None:
                    table = []
                    tables.append(table)
                table.append(cells)
                continue
            table = None

            heading = parse_heading(line)
            if heading is not None:
                category = normalize_heading(heading[1])
                continue

            bullet = parse_bullet(line)
            if bullet is not None:
                indent, text = bullet
                bullets.append(Bullet(text=text, indent=indent, category=category, line_no=line_no))
                continue

            label = parse_label(line)
            if label is not None and not line[:1].isspace():
                category = normalize_heading(label)

        return bullets, tables

    def _initial_category(self, section: Section) -> Optional[str]:
        """Scope sub-heading titles ('Out of Scope') carry over to their bullets."""
        if section.key != SECTION_SCOPE:
            return None
        normalized = normalize_heading(section.title)
        if any(normalized.startswith(alias) for alias in SCOPE_SUBHEADING_ALIASES):
            return normalized
        return None

    def _labeled(self, bullets: list[Bullet]) -> Iterator[tuple[Bullet, Optional[str]]]:
        """
        Yield content bullets with their effective category.

        A bullet that is only a label ('- Negative:') becomes the
        category of the deeper bullets that follow it.
        """
        label: Optional[str] = None
        label_indent = -1
        for bullet in bullets:
            if label is not None and bullet.indent <= label_indent:
                label = None
            bullet_label = parse_label(bullet.text)
            if bullet_label is not None:
                label = normalize_heading(bullet_label)
                label_indent = bullet.indent
                continue
            yield bullet, label or bullet.category

    # --------------------------------------------------------------------------
    # SCOPE
    # --------------------------------------------------------------------------

    def _scope_items(self, section: Section) -> dict[str, list[Bullet]]:
        items: dict[str, list[Bullet]] = {SCOPE_IN: [], SCOPE_OUT: [], SCOPE_DEFERRED: []}
        for bullet, category in self._labeled(section.bullets):
            items[self.scope_part(category)].append(bullet)
        return items

    @staticmethod
    def scope_part(category: Optional[str]) -> str:
        """Map a Scope sub-heading or label to 'in', 'out' or 'deferred'."""
        if not category:
            return SCOPE_IN
        normalized = category.lower().strip()
        if SCOPE_OUT_PATTERN.match(normalized):
            return SCOPE_OUT
        if SCOPE_DEFERRED_PATTERN.match(normalized):
            return SCOPE_DEFERRED
        return SCOPE_IN

    # --------------------------------------------------------------------------
    # PROHIBITIONS AND REQUIREMENTS
    # --------------------------------------------------------------------------

    def _prohibitions(self, section: Section) -> list[Prohibition]:
        content = [bullet for bullet, _ in self._labeled(section.bullets)]
        if not content:
            return []

        top_indent = min(bullet.indent for bullet in content)
        groups: list[tuple[Bullet, list[str]]] = []
        for bullet in content:
            if bullet.indent <= top_indent or not groups:
                groups.append((bullet, []))
            else:
                groups[-1][1].append(bullet.text)

        return [self.parse_prohibition(bullet.text, children) for bullet, children in groups]

    def parse_prohibition(self, text: str, children: Optional[list[str]] = None) -> Prohibition:
        """
        Parse one prohibition bullet.

        Args:
            text: Bullet text ('P1: NEVER log tokens — leaks credentials (test: AC-N1)')
            children: Texts of nested bullets

        Returns:
            Prohibition
        """
        identifier, body = split_identifier(text)

        test_ref = None
        match = TEST_REF_PATTERN.search(body)
        if match:
            test_ref = match.group(1)
            body = body[:match.start()] + body[match.end():]

        statement = normalize_whitespace(body)
        rationale = None
        match = RATIONALE_PATTERN.search(statement)
        if match:
            rationale = statement[match.end():].strip(' .;:') or None
            action_text = statement[:match.start()]
        else:
            action_text = statement

        for child in children or []:
            child_text = strip_emphasis(child)
            if rationale is None and CHILD_RATIONALE_PATTERN.match(child_text):
                rationale = child_text
            if test_ref is None:
                child_match = TEST_REF_PATTERN.search(child)
                if child_match:
                    test_ref = child_match.group(1)

        action = self.matcher.strip_lead_in(strip_emphasis(action_text)).rstrip(' .;:')
        return Prohibition(
            text=normalize_whitespace(text),
            action=action,
            rationale=rationale,
            test_ref=test_ref,
            identifier=identifier,
        )

    def _requirements(self, section: Section) -> list[Requirement]:
        requirements = []
        for bullet, _ in self._labeled(section.bullets):
            identifier, body = split_identifier(bullet.text)
            body = strip_emphasis(body)
            requirements.append(Requirement(
                text=normalize_whitespace(bullet.text),
                leading_verb=self.matcher.leading_verb(body),
                negated=self.matcher.has_negation(body),
                identifier=identifier,
            ))
        return requirements

    # --------------------------------------------------------------------------
    # ACCEPTANCE CRITERIA
    # --------------------------------------------------------------------------

    def _acceptance_criteria(self, section: Section) -> list[AcceptanceCriterion]:
        criteria = []
        for bullet, category in self._labeled(section.bullets):
            identifier, body = split_identifier(bullet.text)
            inline_category, body = self._inline_category(body)
            resolved = inline_category or self.category_of(category) or CATEGORY_HAPPY_PATH
            criteria.append(AcceptanceCriterion(
                category=resolved,
                text=normalize_whitespace(body),
                concrete=self.is_concrete(body),
                identifier=identifier,
            ))

        for table in section.tables:
            for row in table[1:]:
                cells = [cell for cell in row if cell]
                if not cells:
                    continue
                row_category = None
                text_cells = []
                for cell in cells:
                    cell_category = self.category_of(cell) if len(cell) <= 24 else None
                    if row_category is None and cell_category is not None:
                        row_category = cell_category
                    elif not PURE_IDENTIFIER_PATTERN.match(cell):
                        text_cells.append(cell)
                text = ' | '.join(text_cells)
                criteria.append(AcceptanceCriterion(
                    category=row_category or CATEGORY_HAPPY_PATH,
                    text=normalize_whitespace(text),
                    concrete=self.is_concrete(text),
                ))
        return criteria

    def _inline_category(self, text: str) -> tuple[Optional[str], str]:
        """Split an inline category label ('Negative:', '[Edge Case]') from text."""
        match = INLINE_CATEGORY_PATTERN.match(text)
        if not match:
            return None, text
        label = next(group for group in match.groups() if group is not None)
        category = self.category_of(label)
        if category is None:
            return None, text
        return category, text[match.end():].strip()

    @staticmethod
    def category_of(label: Optional[str]) -> Optional[str]:
        """Map a heading or label to an acceptance-criterion category."""
        if not label:
            return None
        normalized = label.lower()
        if re.search(r'\b(?:negative|prohibition)', normalized):
            return CATEGORY_NEGATIVE
        if re.search(r'\bedge', normalized):
            return CATEGORY_EDGE_CASE
        if re.search(r'\b(?:resilien|recovery|failure mode)', normalized):
            return CATEGORY_RESILIENCE
        if re.search(r'\b(?:happy|positive)', normalized):
            return CATEGORY_HAPPY_PATH
        return None

    def is_concrete(self, text: str) -> bool:
        """
        True when text holds a literal number, quoted value or named status.

        Bracket placeholders ('[amount]', '{id}', '<status>') do not count.
        """
        literal = remove_placeholders(text)
        if re.search(r'\d', literal):
            return True
        if QUOTED_PATTERN.search(literal):
            return True
        for token in STATUS_TOKEN_PATTERN.findall(literal):
            if (token not in self.vocabulary.status_token_exclusions
                    and token not in self.vocabulary.http_methods):
                return True
        return bool(self.vocabulary.status_pattern.search(literal))

    # --------------------------------------------------------------------------
    # DECISION TREE
    # --------------------------------------------------------------------------

    def _decision_tree(self, section: Section) -> list[DecisionTreeNode]:
        roots: list[DecisionTreeNode] = []
        stack: list[DecisionTreeNode] = []
        in_fence = False
        in_table = False

        for line in section.lines:
            if is_code_fence(line):
                in_fence = not in_fence
                continue
            if not line.strip():
                continue

            if not in_fence:
                if parse_heading(line) is not None:
                    continue
                if is_table_row(line):
                    cells = split_table_row(line)
                    if is_table_separator(cells):
                        continue
                    if not in_table:
                        in_table = True
                        continue
                    cells = [cell for cell in cells if cell]
                    if cells:
                        roots.append(DecisionTreeNode(
                            condition=strip_emphasis(cells[0]),
                            outcome=strip_emphasis(cells[-1]) if len(cells) > 1 else None,
                        ))
                    continue
            in_table = False

            node = self._tree_node(line)
            if node is None:
                continue
            while stack and stack[-1].depth >= node.depth:
                stack.pop()
            if stack:
                stack[-1].children.append(node)
            else:
                roots.append(node)
            stack.append(node)

        return roots

    def _tree_node(self, line: str) -> Optional[DecisionTreeNode]:
        glyphless = TREE_GLYPHS.sub(' ', line.expandtabs(4))
        bullet = parse_bullet(glyphless)
        if bullet is not None:
            depth, content = bullet
        else:
            depth = len(glyphless) - len(glyphless.lstrip())
            content = glyphless.strip()
        content = re.sub(r'^[-+`\\/]+\s*', '', strip_emphasis(content))
        if not content:
            return None

        parts = ARROW_PATTERN.split(content, maxsplit=1)
        condition = parts[0].strip(' :')
        outcome = parts[1].strip() if len(parts) > 1 and parts[1].strip() else None
        if not condition and not outcome:
            return None
        return DecisionTreeNode(condition=condition, outcome=outcome, depth=depth)

    # --------------------------------------------------------------------------
    # FILES AND DATA MODEL
    # --------------------------------------------------------------------------

    def _file_entries(self, section: Section) -> list[Bullet]:
        entries = [bullet for bullet, _ in self._labeled(section.bullets)]
        for row in section.table_body_rows:
            cells = [cell for cell in row if cell]
            if cells:
                entries.append(Bullet(text=' | '.join(cells)))
        return entries

    def _data_entities(self, section: Section) -> list[DataEntity]:
        entities: list[DataEntity] = []
        current: Optional[DataEntity] = None
        # None: entity opened by a heading/label/code block, every bullet is a property
        current_indent: Optional[int] = None
        in_fence = False
        table_header_seen = False

        for line in section.lines:
            if is_code_fence(line):
                in_fence = not in_fence
                continue
            stripped = line.strip()
            if not stripped:
                continue

            if in_fence:
                match = CODE_ENTITY_PATTERN.match(stripped)
                if match:
                    current = DataEntity(name=match.group(1))
                    entities.append(current)
                    current_indent = None
                elif current is not None and stripped not in CODE_CLOSERS and re.search(r'[A-Za-z_]', stripped):
                    current.properties.append(stripped.rstrip(',;'))
                continue

            if is_table_row(line):
                cells = split_table_row(line)
                if is_table_separator(cells):
                    continue
                if not table_header_seen:
                    table_header_seen = True
                    continue
                cells = [cell for cell in cells if cell]
                if not cells:
                    continue
                if current is None:
                    entities.append(DataEntity(name=strip_emphasis(cells[0]), properties=cells[1:]))
                else:
                    current.properties.append(' '.join(cells))
                continue
            table_header_seen = False

            heading = parse_heading(line)
            if heading is not None:
                current = DataEntity(name=strip_emphasis(heading[1]))
                entities.append(current)
                current_indent = None
                continue

            bullet = parse_bullet(line)
            if bullet is not None:
                indent, text = bullet
                if current is not None and (current_indent is None or indent > current_indent):
                    current.properties.append(text)
                    continue
                current = self._inline_entity(text) or DataEntity(name=strip_emphasis(text).rstrip(':'))
                entities.append(current)
                current_indent = indent
                continue

            label = parse_label(line)
            if label is not None:
                current = DataEntity(name=label)
                entities.append(current)
                current_indent = None
                continue

            inline = self._inline_entity(stripped)
            if inline is not None:
                current = inline
                entities.append(current)
                current_indent = 0

        return entities

    @staticmethod
    def _inline_entity(text: str) -> Optional[DataEntity]:
        """'**User**: id, email' or 'User { id, email }' style entity."""
        match = INLINE_ENTITY_PATTERN.match(text.strip())
        if not match:
            return None
        name = match.group(1) or match.group(2) or match.group(3)
        listed = match.group(4) if match.group(4) is not None else (match.group(5) or '')
        properties = [item.strip() for item in re.split(r'[,;]', listed) if item.strip()]
        return DataEntity(name=name.strip().rstrip(':'), properties=properties)


__all__ = ['SectionExtractor', 'extract_conventions']
