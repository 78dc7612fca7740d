# Path: spec_health/loaders/markdown_blocks.py
"""
Markdown Block Helpers

Line-level recognizers for the markdown constructs a specification
document is made of: ATX headings, list items, table rows, code fences,
label lines and clarification markers.

Everything here is tolerant: a line that does not match a construct is
plain text, never an error.
"""

import re
from typing import Optional

from ..constants import CLARIFICATION_TAG


# ==============================================================================
# PATTERNS
# ==============================================================================

HEADING_PATTERN = re.compile(r'^\s{0,3}(#{1,6})\s+(.*?)\s*#*\s*$')

# '-', '*', '+', '1.', '1)' markers; the marker must be followed by whitespace
BULLET_PATTERN = re.compile(r'^(\s*)(?:[-*+]|\d{1,3}[.)])\s+(.*\S)\s*$')

TASK_BOX_PATTERN = re.compile(r'^\[[ xX]\]\s*')

CODE_FENCE_PATTERN = re.compile(r'^\s*(```|~~~)')

TABLE_SEPARATOR_CELL = re.compile(r'^:?-{1,}:?$')

CLARIFICATION_PATTERN = re.compile(
    r'\[\s*' + r'\s+'.join(CLARIFICATION_TAG.split()) + r'\s*(?::[^\]]*)?\]',
    re.IGNORECASE,
)

# '1.', '1.2', '§3', 'IV.' style heading numbering
HEADING_NUMBERING = re.compile(r'^(?:§\s*)?(?:\d+(?:\.\d+)*\.?|[ivxIVX]+\.)\s+')

# Underscores only count at word edges so SNAKE_CASE survives
EMPHASIS_PATTERN = re.compile(r'\*+|`+|(?<!\w)_+|_+(?!\w)')

BOLD_LABEL_PATTERN = re.compile(r'^\*\*([^*]+?)\*\*\s*:?\s*$')

PLAIN_LABEL_PATTERN = re.compile(r'^([A-Za-z][\w /&()\-]{0,48}):\s*$')

_IDENTIFIER = r'[A-Z]{1,5}(?:-[A-Z]{1,5})?-?\d+(?:\.\d+)?[a-z]?'

IDENTIFIER_PATTERN = re.compile(
    rf'^(?:\[({_IDENTIFIER})\]\s*[:.)]?|({_IDENTIFIER})\s*[:.)])\s*'
)

PLACEHOLDER_PATTERN = re.compile(r'\[[^\]]*\]|\{[^}]*\}|<[^>]*>')

ARROW_PATTERN = re.compile(r'\s*(?:→|->|=>|⇒)\s*')

TREE_GLYPHS = re.compile(r'[│├└─┬┼┤┌┐┘┴╰╭|]')


# ==============================================================================
# HELPERS
# ==============================================================================

def parse_heading(line: str) -> Optional[tuple[int, str]]:
    """
    Parse an ATX heading.

    Returns:
        (level, title) or None if the line is not a heading
    """
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    title = match.group(2).strip()
    if not title:
        return None
    return len(match.group(1)), title


def normalize_heading(title: str) -> str:
    """
    Normalize heading text for alias matching.

    Lower-cases, drops emphasis and leading numbering, treats ' and '
    as '&' and collapses whitespace.
    """
    text = EMPHASIS_PATTERN.sub('', title).strip()
    text = HEADING_NUMBERING.sub('', text)
    text = text.lower()
    text = re.sub(r'\band\b', '&', text)
    text = re.sub(r'\s*&\s*', ' & ', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip(' :')


def parse_bullet(line: str) -> Optional[tuple[int, str]]:
    """
    Parse a list item.

    Returns:
        (indent, text) with marker and task box removed, or None
    """
    match = BULLET_PATTERN.match(line)
    if not match:
        return None
    indent = len(match.group(1).expandtabs(4))
    text = TASK_BOX_PATTERN.sub('', match.group(2)).strip()
    if not text:
        return None
    return indent, text


def is_code_fence(line: str) -> bool:
    return bool(CODE_FENCE_PATTERN.match(line))


def is_table_row(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith('|') and stripped.count('|') >= 2


def split_table_row(line: str) -> list[str]:
    """Split a '|'-delimited row into trimmed cells."""
    stripped = line.strip()
    if stripped.startswith('|'):
        stripped = stripped[1:]
    if stripped.endswith('|'):
        stripped = stripped[:-1]
    return [cell.strip() for cell in stripped.split('|')]


def is_table_separator(cells: list[str]) -> bool:
    """True for '|---|:---:|' rows."""
    non_empty = [cell.replace(' ', '') for cell in cells if cell.strip()]
    return bool(non_empty) and all(TABLE_SEPARATOR_CELL.match(cell) for cell in non_empty)


def parse_label(line: str) -> Optional[str]:
    """
    Parse a label line such as 'Out of Scope:' or '**Negative**'.

    Returns:
        Label text without emphasis or colon, or None
    """
    stripped = line.strip()
    if not stripped or parse_bullet(line) or is_table_row(line):
        return None
    match = BOLD_LABEL_PATTERN.match(stripped)
    if match:
        return match.group(1).strip().rstrip(':').strip()
    match = PLAIN_LABEL_PATTERN.match(EMPHASIS_PATTERN.sub('', stripped))
    if match:
        return match.group(1).strip()
    return None


def strip_emphasis(text: str) -> str:
    return EMPHASIS_PATTERN.sub('', text).strip()


def split_identifier(text: str) -> tuple[Optional[str], str]:
    """
    Split a leading identifier ('P1:', 'FR-2.', '[AC-N1]') from text.

    Returns:
        (identifier or None, remaining text)
    """
    candidate = re.sub(r'^\*\*([^*]+)\*\*', r'\1', text.strip())
    match = IDENTIFIER_PATTERN.match(candidate)
    if not match:
        return None, text.strip()
    return match.group(1) or match.group(2), candidate[match.end():].strip()


def find_clarification_markers(text: str) -> list[str]:
    """Every clarification marker in text, in order."""
    return CLARIFICATION_PATTERN.findall(text)


def remove_clarification_markers(text: str) -> str:
    return CLARIFICATION_PATTERN.sub(' ', text)


def remove_placeholders(text: str) -> str:
    """Drop '[...]', '{...}' and '<...>' placeholders."""
    return PLACEHOLDER_PATTERN.sub(' ', text)


def normalize_whitespace(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


__all__ = [
    'HEADING_PATTERN',
    'BULLET_PATTERN',
    'CLARIFICATION_PATTERN',
    'ARROW_PATTERN',
    'TREE_GLYPHS',
    'parse_heading',
    'normalize_heading',
    'parse_bullet',
    'is_code_fence',
    'is_table_row',
    'split_table_row',
    'is_table_separator',
    'parse_label',
    'strip_emphasis',
    'split_identifier',
    'find_clarification_markers',
    'remove_clarification_markers',
    'remove_placeholders',
    'normalize_whitespace',
]
