"""
Text cleanup for feed fields.
"""

import re
from typing import Optional


TAG_RE = re.compile(r'<[^>]*>')
WHITESPACE_RE = re.compile(r'\s+')

# Decoded in this order. '&amp;' runs before '&lt;'/'&gt;', so '&amp;lt;' ends up as '<'.
HTML_ENTITIES = (
    ('&nbsp;', ' '),
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&quot;', '"'),
    ('&#39;', "'"),
)

XML_ESCAPES = (
    ('&', '&amp;'),  # must be first
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
)


def clean_content(html: Optional[str]) -> str:
    """Strip HTML tags and a fixed set of entities, returning single-spaced plain text."""
    if not html:
        return ''
    text = TAG_RE.sub(' ', html)
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return WHITESPACE_RE.sub(' ', text).strip()


def escape_xml(text: Optional[str]) -> str:
    """Escape the five XML special characters."""
    if not text:
        return ''
    for char, entity in XML_ESCAPES:
        text = text.replace(char, entity)
    return text
