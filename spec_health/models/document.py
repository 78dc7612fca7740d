# Path: spec_health/models/document.py
"""
Document Model

Typed view of a specification document produced by the SectionExtractor.

The Document keeps every line it was built from (preamble and
unrecognized sections included) so whole-document counts see all
of the text. Structured views (prohibitions, criteria, decision tree,
...) are derived from section lines and rebuilt by
SectionExtractor.index() whenever the lines change.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..constants import (
    CANONICAL_SECTIONS,
    COUNTED_SECTIONS,
    SECTION_TITLES,
    SCOPE_IN,
    SCOPE_OUT,
    SCOPE_DEFERRED,
)


@dataclass
class Bullet:
    """
    A single list item.

    Attributes:
        text: Item text without marker or task box
        indent: Leading whitespace width
        category: Nearest enclosing sub-heading or label line (normalized), if any
        line_no: Index of the line within its section
    """
    text: str
    indent: int = 0
    category: Optional[str] = None
    line_no: int = 0


@dataclass
class Section:
    """
    A document section.

    Attributes:
        key: Canonical section key (None for preamble/unrecognized)
        title: Heading text as written
        level: Heading level (0 for preamble)
        heading: Original heading line ('' for preamble)
        lines: Body lines, heading excluded
        present: False for placeholders of missing canonical sections
        bullets: List items found in the body (derived)
        tables: Tables found in the body, each a list of rows of cells,
            header row first (derived)
    """
    key: Optional[str]
    title: str
    level: int = 2
    heading: str = ''
    lines: list[str] = field(default_factory=list)
    present: bool = True
    bullets: list[Bullet] = field(default_factory=list, repr=False)
    tables: list[list[list[str]]] = field(default_factory=list, repr=False)

    @property
    def table_body_rows(self) -> list[list[str]]:
        """Every table row except header rows."""
        rows = []
        for table in self.tables:
            rows.extend(table[1:])
        return rows

    @property
    def body(self) -> str:
        """Section body as text."""
        return '\n'.join(self.lines)

    def is_empty(self) -> bool:
        """True when no body line carries content (HTML comments ignored)."""
        in_comment = False
        for line in self.lines:
            stripped = line.strip()
            if in_comment:
                if '-->' in stripped:
                    in_comment = False
                    stripped = stripped.split('-->', 1)[1].strip()
                else:
                    continue
            while '<!--' in stripped:
                before, _, after = stripped.partition('<!--')
                if '-->' in after:
                    stripped = before + after.split('-->', 1)[1]
                else:
                    stripped = before
                    in_comment = True
            if stripped.strip():
                return False
        return True

    @property
    def is_filled(self) -> bool:
        """Present and non-empty."""
        return self.present and not self.is_empty()

    def render(self) -> list[str]:
        """Lines for this section, heading included."""
        if not self.present:
            return []
        rendered = [self.heading] if self.heading else []
        rendered.extend(self.lines)
        return rendered


@dataclass
class Prohibition:
    """
    A 'NEVER X' statement from the Prohibitions section.

    Attributes:
        text: Full bullet text
        action: Prohibited action (negation lead-in and rationale removed)
        rationale: Rationale clause after a dash or 'because', if any
        test_ref: Linked negative-test reference, if any
        identifier: Prohibition identifier (e.g. 'P1'), if any
    """
    text: str
    action: str
    rationale: Optional[str] = None
    test_ref: Optional[str] = None
    identifier: Optional[str] = None

    @property
    def has_rationale(self) -> bool:
        return bool(self.rationale)


@dataclass
class Requirement:
    """
    A bullet from the Requirements section.

    Attributes:
        text: Full bullet text
        leading_verb: First verb after identifiers, subjects and modals
        negated: Whether the requirement carries a negation cue
        identifier: Requirement identifier (e.g. 'FR-1'), if any
    """
    text: str
    leading_verb: str = ''
    negated: bool = False
    identifier: Optional[str] = None


@dataclass
class AcceptanceCriterion:
    """
    A bullet from the Acceptance Criteria section.

    Attributes:
        category: Happy Path, Negative, Edge Case or Resilience
        text: Criterion text (category label removed)
        concrete: Contains a literal number, quoted value or named status
        identifier: Criterion identifier (e.g. 'AC-N1'), if any
    """
    category: str
    text: str
    concrete: bool = False
    identifier: Optional[str] = None


@dataclass
class DecisionTreeNode:
    """
    A branch or leaf of the decision tree.

    Attributes:
        condition: Branch condition text
        outcome: Outcome text (after an arrow), if any
        children: Child nodes
        depth: Indentation depth
    """
    condition: str
    outcome: Optional[str] = None
    children: list['DecisionTreeNode'] = field(default_factory=list)
    depth: int = 0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def outcome_label(self) -> str:
        """Outcome a leaf resolves to."""
        return self.outcome or self.condition

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class DataEntity:
    """An entity block from the Data Model section."""
    name: str
    properties: list[str] = field(default_factory=list)


@dataclass
class Document:
    """
    Parsed specification document.

    Attributes:
        name: Document name (file stem or caller-supplied label)
        sections: Sections in document order (placeholders excluded)
        index: Canonical key -> Section (placeholders for missing keys)
        requirements: Parsed Requirements bullets
        prohibitions: Parsed Prohibitions bullets
        acceptance_criteria: Parsed Acceptance Criteria bullets
        decision_tree: Root nodes of the Decision Tree
        domain_rule_rows: Body rows of Domain Rules tables
        file_entries: Files to Create/Modify bullets
        data_entities: Entity blocks from Data Model
        scope_items: Scope bullets by part ('in', 'out', 'deferred')
        clarification_markers: Context of every clarification marker
        conventions: 'Don't use: X' entries from Codebase Context
    """
    name: str = 'document'
    sections: list[Section] = field(default_factory=list)
    index: dict[str, Section] = field(default_factory=dict)
    requirements: list[Requirement] = field(default_factory=list)
    prohibitions: list[Prohibition] = field(default_factory=list)
    acceptance_criteria: list[AcceptanceCriterion] = field(default_factory=list)
    decision_tree: list[DecisionTreeNode] = field(default_factory=list)
    domain_rule_rows: list[list[str]] = field(default_factory=list)
    domain_rules_table: bool = False
    file_entries: list[Bullet] = field(default_factory=list)
    data_entities: list[DataEntity] = field(default_factory=list)
    scope_items: dict[str, list[Bullet]] = field(default_factory=dict)
    clarification_markers: list[str] = field(default_factory=list)
    conventions: list[str] = field(default_factory=list)

    def section(self, key: str) -> Section:
        """Get a canonical section (placeholder if missing)."""
        section = self.index.get(key)
        if section is None:
            section = Section(key=key, title=SECTION_TITLES.get(key, key), present=False)
            self.index[key] = section
        return section

    def is_filled(self, key: str) -> bool:
        """Canonical section is present and non-empty."""
        return self.section(key).is_filled

    def filled_counted_sections(self) -> list[str]:
        """Counted sections that are present and non-empty."""
        return [key for key in COUNTED_SECTIONS if self.is_filled(key)]

    def missing_counted_sections(self) -> list[str]:
        """Counted sections that are absent or empty, in template order."""
        return [key for key in COUNTED_SECTIONS if not self.is_filled(key)]

    def canonical_sections(self) -> list[Section]:
        """All canonical sections in template order (placeholders included)."""
        return [self.section(key) for key in CANONICAL_SECTIONS]

    def out_of_scope_items(self) -> list[Bullet]:
        return self.scope_items.get(SCOPE_OUT, [])

    def deferred_items(self) -> list[Bullet]:
        return self.scope_items.get(SCOPE_DEFERRED, [])

    def in_scope_items(self) -> list[Bullet]:
        return self.scope_items.get(SCOPE_IN, [])

    def decision_nodes(self) -> list[DecisionTreeNode]:
        """Every decision tree node, depth first."""
        nodes = []
        for root in self.decision_tree:
            nodes.extend(root.walk())
        return nodes

    def decision_leaves(self) -> list[DecisionTreeNode]:
        return [node for node in self.decision_nodes() if node.is_leaf]

    def all_bullets(self) -> list[tuple[Section, Bullet]]:
        """Every bullet in the document with its section, document order."""
        return [
            (section, bullet)
            for section in self.sections
            for bullet in section.bullets
        ]

    def render(self) -> str:
        """Document text, sections in document order."""
        lines: list[str] = []
        for section in self.sections:
            lines.extend(section.render())
        return '\n'.join(lines)

    @property
    def text(self) -> str:
        return self.render()


__all__ = [
    'Bullet',
    'Section',
    'Prohibition',
    'Requirement',
    'AcceptanceCriterion',
    'DecisionTreeNode',
    'DataEntity',
    'Document',
]
