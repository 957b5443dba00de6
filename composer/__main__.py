#!/usr/bin/env python3
"""
Email Composer CLI

JSON bridge between an editor frontend and the composer engine.
The frontend passes the current document, the engine applies one
operation and prints the full updated document back.

Usage:
    python -m composer new
    python -m composer apply-template <type> [--doc <json> | --doc-file <path>]
    python -m composer set-field <name> <value> [--doc ...]
    python -m composer move-section <id> up|down [--doc ...]
    python -m composer set-content <id> <text> [--doc ...]
    python -m composer set-style <id> <key> <value> [--doc ...]
    python -m composer set-image <path-or-url> [--doc ...]
    python -m composer render-html [--doc ...]
    python -m composer render-text [--doc ...]
    python -m composer html-to-text <path>
    python -m composer export-html [--doc ...] [--dest <dir>]
    python -m composer export-config [--doc ...] [--dest <dir>]
    python -m composer templates
    python -m composer save-settings [--sender-name ...] ...

All commands output JSON to stdout. Logs go to stderr.
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from composer.config_io import deserialize_config, document_to_dict
from composer.document import (
    move_section,
    set_field,
    set_section_content,
    set_section_style,
)
from composer.export import DownloadsExporter, export_config, export_html
from composer.intake import attach_header_image, decoder_for
from composer.model import EmailDocument
from composer.renderer import html_to_text, render_html, render_text
from composer.settings import load_settings, new_document, save_settings
from composer.templates import TEMPLATES, apply_template

logger = logging.getLogger("composer")


def output_json(data: Any, success: bool = True) -> None:
    """Output JSON response to stdout."""
    response = {
        "success": success,
        "data": data if success else None,
        "error": None if success else data,
    }
    print(json.dumps(response, indent=2, ensure_ascii=False))


def _parse_style_value(key: str, value: str):
    if key == "bold":
        return str(value).strip().lower() in {"1", "true", "yes", "y"}
    return value


def _load_doc(args: argparse.Namespace) -> EmailDocument:
    if getattr(args, "doc", None):
        return deserialize_config(args.doc)
    if getattr(args, "doc_file", None):
        return deserialize_config(Path(args.doc_file).read_text(encoding="utf-8"))
    return new_document(load_settings())


def _exporter(args: argparse.Namespace) -> DownloadsExporter:
    dest = args.dest or load_settings().get("export_dir") or None
    return DownloadsExporter(dest)


def _doc_response(doc: EmailDocument) -> dict:
    return {"document": document_to_dict(doc)}


# ============================================================
# commands
# ============================================================

def cmd_new(args: argparse.Namespace) -> dict:
    return _doc_response(new_document(load_settings()))


def cmd_apply_template(args: argparse.Namespace) -> dict:
    return _doc_response(apply_template(_load_doc(args), args.template_type))


def cmd_set_field(args: argparse.Namespace) -> dict:
    return _doc_response(set_field(_load_doc(args), args.name, args.value))


def cmd_move_section(args: argparse.Namespace) -> dict:
    return _doc_response(move_section(_load_doc(args), args.section_id, args.direction))


def cmd_set_content(args: argparse.Namespace) -> dict:
    return _doc_response(set_section_content(_load_doc(args), args.section_id, args.content))


def cmd_set_style(args: argparse.Namespace) -> dict:
    value = _parse_style_value(args.key, args.value)
    return _doc_response(set_section_style(_load_doc(args), args.section_id, args.key, value))


def cmd_set_image(args: argparse.Namespace) -> dict:
    doc = _load_doc(args)
    return _doc_response(attach_header_image(doc, decoder_for(args.source), args.source))


def cmd_render_html(args: argparse.Namespace) -> dict:
    return {"html": render_html(_load_doc(args))}


def cmd_render_text(args: argparse.Namespace) -> dict:
    return {"text": render_text(_load_doc(args))}


def cmd_html_to_text(args: argparse.Namespace) -> dict:
    html = Path(args.path).read_text(encoding="utf-8")
    return {"text": html_to_text(html)}


def cmd_export_html(args: argparse.Namespace) -> dict:
    path = export_html(_load_doc(args), _exporter(args))
    return {"path": str(path)}


def cmd_export_config(args: argparse.Namespace) -> dict:
    path = export_config(_load_doc(args), _exporter(args))
    return {"path": str(path)}


def cmd_templates(args: argparse.Namespace) -> dict:
    return {"templates": {key: asdict(tpl) for key, tpl in TEMPLATES.items()}}


def cmd_save_settings(args: argparse.Namespace) -> dict:
    settings = load_settings()
    for key in ("sender_name", "sender_role", "company_name", "header_image",
                "default_template", "export_dir"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    path = save_settings(settings)
    return {"path": str(path), "settings": settings}


# ============================================================
# argument parsing
# ============================================================

def _add_doc_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group()
    g.add_argument("--doc", help="Document configuration as JSON text")
    g.add_argument("--doc-file", help="Path to a saved email-template.json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="composer",
        description="Email Composer CLI - JSON bridge for the editor frontend",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("COMPOSER_LOG_LEVEL", "WARNING"),
        help="Logging level for stderr output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # new
    p_new = subparsers.add_parser("new", help="Start a new document from settings")
    p_new.set_defaults(func=cmd_new)

    # apply-template
    p_tpl = subparsers.add_parser("apply-template", help="Regenerate sections from a template")
    p_tpl.add_argument("template_type", help="meeting, proposal, followup or introduction")
    _add_doc_args(p_tpl)
    p_tpl.set_defaults(func=cmd_apply_template)

    # set-field
    p_field = subparsers.add_parser("set-field", help="Set a recipient/sender/company field")
    p_field.add_argument("name", help="recipientName, recipientRole, senderName, senderRole or companyName")
    p_field.add_argument("value")
    _add_doc_args(p_field)
    p_field.set_defaults(func=cmd_set_field)

    # move-section
    p_move = subparsers.add_parser("move-section", help="Move a section up or down")
    p_move.add_argument("section_id")
    p_move.add_argument("direction", choices=["up", "down"])
    _add_doc_args(p_move)
    p_move.set_defaults(func=cmd_move_section)

    # set-content
    p_content = subparsers.add_parser("set-content", help="Replace a section's text")
    p_content.add_argument("section_id")
    p_content.add_argument("content")
    _add_doc_args(p_content)
    p_content.set_defaults(func=cmd_set_content)

    # set-style
    p_style = subparsers.add_parser("set-style", help="Change one style attribute of a section")
    p_style.add_argument("section_id")
    p_style.add_argument("key", help="color, fontSize, align or bold")
    p_style.add_argument("value")
    _add_doc_args(p_style)
    p_style.set_defaults(func=cmd_set_style)

    # set-image
    p_image = subparsers.add_parser("set-image", help="Embed a header image from a file or URL")
    p_image.add_argument("source", help="Image file path or http(s) URL")
    _add_doc_args(p_image)
    p_image.set_defaults(func=cmd_set_image)

    # render-html
    p_html = subparsers.add_parser("render-html", help="Render the document as HTML")
    _add_doc_args(p_html)
    p_html.set_defaults(func=cmd_render_html)

    # render-text
    p_text = subparsers.add_parser("render-text", help="Render the document as plain text")
    _add_doc_args(p_text)
    p_text.set_defaults(func=cmd_render_text)

    # html-to-text
    p_h2t = subparsers.add_parser("html-to-text", help="Extract text from an exported HTML file")
    p_h2t.add_argument("path")
    p_h2t.set_defaults(func=cmd_html_to_text)

    # export-html / export-config
    p_exh = subparsers.add_parser("export-html", help="Save business-email.html")
    _add_doc_args(p_exh)
    p_exh.add_argument("--dest", help="Destination folder (default: Downloads)")
    p_exh.set_defaults(func=cmd_export_html)

    p_exc = subparsers.add_parser("export-config", help="Save email-template.json")
    _add_doc_args(p_exc)
    p_exc.add_argument("--dest", help="Destination folder (default: Downloads)")
    p_exc.set_defaults(func=cmd_export_config)

    # templates
    p_list = subparsers.add_parser("templates", help="List registered templates")
    p_list.set_defaults(func=cmd_templates)

    # save-settings
    p_set = subparsers.add_parser("save-settings", help="Update persisted defaults")
    p_set.add_argument("--sender-name")
    p_set.add_argument("--sender-role")
    p_set.add_argument("--company-name")
    p_set.add_argument("--header-image")
    p_set.add_argument("--default-template")
    p_set.add_argument("--export-dir")
    p_set.set_defaults(func=cmd_save_settings)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level_name = str(args.log_level).upper()
    logging.basicConfig(
        level=logging._nameToLevel.get(level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    if level_name not in logging._nameToLevel:
        logger.warning("Unknown log level %r; using WARNING", args.log_level)

    try:
        data = args.func(args)
    except Exception as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        output_json(str(e), success=False)
        return 1

    output_json(data)
    return 0


if __name__ == "__main__":
    sys.exit(main())
