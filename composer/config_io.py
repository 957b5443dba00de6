# composer/config_io.py

"""
JSON configuration format for saved email templates.

Keys follow the editor's camelCase vocabulary so that a saved
email-template.json can be loaded straight back into the frontend:

    {
      "type": "meeting",
      "subject": "...",
      "recipientName": "...",
      ...
      "headerImage": "...",
      "sections": [
        {"id": "1", "type": "subject", "content": "...",
         "style": {"color": "#374151", "fontSize": "18px", "align": "left", "bold": true}}
      ]
    }
"""

import json
from typing import Any, Dict, List

from composer.errors import ConfigError
from composer.model import EmailDocument, Section, TextStyle


# attribute name -> JSON key, in output order
_DOCUMENT_KEYS = (
    ("template_type", "type"),
    ("subject", "subject"),
    ("recipient_name", "recipientName"),
    ("recipient_role", "recipientRole"),
    ("sender_name", "senderName"),
    ("sender_role", "senderRole"),
    ("company_name", "companyName"),
    ("header_image", "headerImage"),
)

_STYLE_KEYS = (
    ("color", "color"),
    ("font_size", "fontSize"),
    ("align", "align"),
    ("bold", "bold"),
)


# ============================================================
# dict conversion
# ============================================================

def style_to_dict(style: TextStyle) -> Dict[str, Any]:
    return {key: getattr(style, attr) for attr, key in _STYLE_KEYS}


def section_to_dict(section: Section) -> Dict[str, Any]:
    return {
        "id": section.id,
        "type": section.type,
        "content": section.content,
        "style": style_to_dict(section.style),
    }


def document_to_dict(doc: EmailDocument) -> Dict[str, Any]:
    data: Dict[str, Any] = {key: getattr(doc, attr) for attr, key in _DOCUMENT_KEYS}
    data["sections"] = [section_to_dict(s) for s in doc.sections]
    return data


def _require(data: Any, key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be an object")
    if key not in data:
        raise ConfigError(f"{where} is missing required key {key!r}")
    return data[key]


def _style_from_dict(data: Any, where: str) -> TextStyle:
    values = {attr: _require(data, key, where) for attr, key in _STYLE_KEYS}
    return TextStyle(**values)


def _section_from_dict(data: Any, where: str) -> Section:
    return Section(
        id=str(_require(data, "id", where)),
        type=_require(data, "type", where),
        content=_require(data, "content", where),
        style=_style_from_dict(_require(data, "style", where), f"{where}.style"),
    )


def document_from_dict(data: Any) -> EmailDocument:
    values = {attr: _require(data, key, "document") for attr, key in _DOCUMENT_KEYS}

    raw_sections = _require(data, "sections", "document")
    if not isinstance(raw_sections, list):
        raise ConfigError("document.sections must be a list")

    sections: List[Section] = []
    seen = set()
    for i, raw in enumerate(raw_sections):
        section = _section_from_dict(raw, f"sections[{i}]")
        if section.id in seen:
            raise ConfigError(f"Duplicate section id: {section.id!r}")
        seen.add(section.id)
        sections.append(section)

    return EmailDocument(sections=tuple(sections), **values)


# ============================================================
# text form
# ============================================================

def serialize_config(doc: EmailDocument) -> str:
    """Pretty-printed JSON holding every field of the document."""
    return json.dumps(document_to_dict(doc), indent=2, ensure_ascii=False)


def deserialize_config(text: str) -> EmailDocument:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration JSON: {e}") from e
    return document_from_dict(data)
