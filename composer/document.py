# composer/document.py

import logging
from dataclasses import replace
from typing import Callable, Dict, Tuple, Union

from composer.errors import NotFoundError
from composer.model import EmailDocument, Section

logger = logging.getLogger(__name__)


# Editor field names (camelCase, as sent by the frontend) -> attribute names.
FIELD_NAMES: Dict[str, str] = {
    "recipientName": "recipient_name",
    "recipientRole": "recipient_role",
    "senderName": "sender_name",
    "senderRole": "sender_role",
    "companyName": "company_name",
}

STYLE_KEYS: Dict[str, str] = {
    "color": "color",
    "fontSize": "font_size",
    "align": "align",
    "bold": "bold",
}

# attribute -> section type whose text mentions the field's value
_SYNCED_FIELDS: Dict[str, str] = {
    "recipient_name": "greeting",
    "sender_name": "signature",
}

DIRECTIONS = ("up", "down")


# ============================================================
# helpers
# ============================================================

def _normalize_key(key: str, mapping: Dict[str, str], kind: str) -> str:
    if key in mapping:
        return mapping[key]
    if key in mapping.values():
        return key
    raise ValueError(f"Unknown {kind}: {key!r}")


def _replace_section(
    doc: EmailDocument,
    section_id: str,
    fn: Callable[[Section], Section],
) -> EmailDocument:
    idx = doc.index_of(section_id)
    if idx < 0:
        raise NotFoundError(section_id)

    sections = list(doc.sections)
    sections[idx] = fn(sections[idx])
    return replace(doc, sections=tuple(sections))


def _sync_name(content: str, old: str, new: str) -> str:
    # Best effort: if the text no longer contains the old value verbatim,
    # it is left exactly as the author wrote it.
    if not old or old == new or old not in content:
        return content
    return content.replace(old, new, 1)


# ============================================================
# public API
# ============================================================

def find_section(doc: EmailDocument, section_id: str) -> Section:
    idx = doc.index_of(section_id)
    if idx < 0:
        raise NotFoundError(section_id)
    return doc.sections[idx]


def set_field(doc: EmailDocument, field_name: str, value: str) -> EmailDocument:
    """
    Set one of the recipient/sender/company fields.

    Changing recipientName or senderName also rewrites the first
    occurrence of the previous value inside the greeting or signature
    sections respectively. Roles and company are not propagated.
    """
    attr = _normalize_key(field_name, FIELD_NAMES, "field")
    old = getattr(doc, attr)

    sections: Tuple[Section, ...] = doc.sections
    target_type = _SYNCED_FIELDS.get(attr)
    if target_type:
        synced = []
        for s in sections:
            if s.type == target_type:
                content = _sync_name(s.content, old, value)
                if content != s.content:
                    s = replace(s, content=content)
                else:
                    logger.debug("Section %s does not mention %r; left unchanged", s.id, old)
            synced.append(s)
        sections = tuple(synced)

    return replace(doc, sections=sections, **{attr: value})


def move_section(doc: EmailDocument, section_id: str, direction: str) -> EmailDocument:
    """
    Swap a section with its neighbour above or below.

    Moving the first section up or the last one down returns the document
    unchanged. An unknown id raises NotFoundError.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction!r}")

    idx = doc.index_of(section_id)
    if idx < 0:
        raise NotFoundError(section_id)

    target = idx - 1 if direction == "up" else idx + 1
    if target < 0 or target >= len(doc.sections):
        logger.debug("Section %s already at the %s boundary", section_id, direction)
        return doc

    sections = list(doc.sections)
    sections[idx], sections[target] = sections[target], sections[idx]
    return replace(doc, sections=tuple(sections))


def set_section_content(doc: EmailDocument, section_id: str, content: str) -> EmailDocument:
    return _replace_section(doc, section_id, lambda s: replace(s, content=content))


def set_section_style(
    doc: EmailDocument,
    section_id: str,
    style_key: str,
    value: Union[str, bool],
) -> EmailDocument:
    """Replace a single style attribute (color, fontSize, align or bold)."""
    attr = _normalize_key(style_key, STYLE_KEYS, "style key")
    return _replace_section(
        doc,
        section_id,
        lambda s: replace(s, style=replace(s.style, **{attr: value})),
    )


def set_header_image(doc: EmailDocument, uri: str) -> EmailDocument:
    # URL or data URI; stored as given.
    return replace(doc, header_image=uri)
