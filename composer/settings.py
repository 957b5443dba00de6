# composer/settings.py

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from appdirs import user_data_dir

from composer.export import atomic_write_text
from composer.model import EmailDocument, TEMPLATE_TYPES, default_document
from composer.templates import TEMPLATES, apply_template, signature_block

logger = logging.getLogger(__name__)


APP_NAME = "Email Composer"
APP_AUTHOR = "Email Composer"

SETTINGS_FILENAME = "composer_settings.json"

# Settings schema version for future compatibility
SCHEMA_VERSION = 1


def settings_path() -> Path:
    """COMPOSER_DATA_DIR wins over the platform user-data directory."""
    data_dir = os.environ.get("COMPOSER_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR)
    return Path(data_dir) / SETTINGS_FILENAME


def default_settings() -> Dict[str, Any]:
    doc = default_document()
    return {
        "schema_version": SCHEMA_VERSION,
        "sender_name": doc.sender_name,
        "sender_role": doc.sender_role,
        "company_name": doc.company_name,
        "header_image": doc.header_image,
        "default_template": doc.template_type,
        "export_dir": "",
    }


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    defaults = default_settings()
    for key, value in defaults.items():
        data.setdefault(key, value)
        if not isinstance(data[key], type(value)):
            logger.warning("Ignoring invalid setting %s=%r", key, data[key])
            data[key] = value

    if data["default_template"] not in TEMPLATE_TYPES:
        logger.warning("Unknown default template %r; using meeting", data["default_template"])
        data["default_template"] = defaults["default_template"]

    data["schema_version"] = SCHEMA_VERSION
    return data


# ============================================================
# public API
# ============================================================

def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from disk.

    A missing file yields the defaults. A corrupt file is logged and
    also yields the defaults so the editor can still start.
    """
    p = Path(path) if path else settings_path()
    if not p.exists():
        return default_settings()

    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read settings %s: %s", p, e)
        return default_settings()

    if not isinstance(data, dict):
        logger.warning("Settings %s is not a JSON object; using defaults", p)
        return default_settings()

    return _normalize(data)


def save_settings(settings: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> Path:
    p = Path(path) if path else settings_path()
    data = _normalize(dict(settings))
    atomic_write_text(p, json.dumps(data, indent=2, ensure_ascii=False))
    return p


def new_document(settings: Optional[Dict[str, Any]] = None) -> EmailDocument:
    """
    Starting document for a new editing session.

    The sender profile and header image come from settings. The built-in
    quarterly review draft is kept unless settings pick another template;
    "custom" keeps the draft and only rewrites the signature block.
    """
    settings = _normalize(dict(settings or {}))

    doc = replace(
        default_document(),
        sender_name=settings["sender_name"],
        sender_role=settings["sender_role"],
        company_name=settings["company_name"],
        header_image=settings["header_image"],
    )

    template = settings["default_template"]
    base = default_document()
    sender_changed = (doc.sender_name, doc.sender_role, doc.company_name) != (
        base.sender_name,
        base.sender_role,
        base.company_name,
    )
    if template in TEMPLATES:
        if template != base.template_type or sender_changed:
            doc = apply_template(doc, template)
        return doc

    # No record (e.g. "custom"): keep the built-in draft, re-sign it.
    signature = signature_block(
        TEMPLATES[base.template_type].signature,
        doc.sender_name,
        doc.sender_role,
        doc.company_name,
    )
    sections = tuple(
        replace(s, content=signature) if s.type == "signature" else s
        for s in doc.sections
    )
    return replace(doc, template_type=template, sections=sections)
