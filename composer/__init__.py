# composer/__init__.py
"""
Email Composer - editing core for structured business emails.

This package provides the core functionality for:
- Holding an email as an ordered set of styled sections
- Filling the sections from built-in templates
- Exporting the email as static HTML or as a JSON configuration

Public API:
-----------
Document:
    default_document() -> EmailDocument
    new_document(settings) -> EmailDocument
    apply_template(doc, template_type) -> EmailDocument
    set_field(doc, field_name, value) -> EmailDocument
    move_section(doc, section_id, direction) -> EmailDocument
    set_section_content(doc, section_id, content) -> EmailDocument
    set_section_style(doc, section_id, style_key, value) -> EmailDocument

Output:
    render_html(doc) -> str
    serialize_config(doc) -> str
    deserialize_config(text) -> EmailDocument

The engine has no UI dependencies and can be used standalone.
"""

from composer.config_io import deserialize_config, serialize_config
from composer.document import (
    find_section,
    move_section,
    set_field,
    set_header_image,
    set_section_content,
    set_section_style,
)
from composer.errors import (
    ComposerError,
    ConfigError,
    ExportError,
    ImageIntakeError,
    NotFoundError,
    UnsupportedTemplateError,
)
from composer.export import DownloadsExporter, FileExporter, export_config, export_html
from composer.intake import FileImageDecoder, ImageDecoder, UrlImageDecoder, attach_header_image
from composer.model import EmailDocument, Section, TextStyle, default_document
from composer.renderer import html_to_text, render_html, render_text
from composer.settings import load_settings, new_document, save_settings
from composer.templates import TEMPLATES, apply_template, get_template

__all__ = [
    # Model
    "EmailDocument",
    "Section",
    "TextStyle",
    "default_document",
    "new_document",
    # Templates
    "TEMPLATES",
    "apply_template",
    "get_template",
    # Editing
    "find_section",
    "move_section",
    "set_field",
    "set_header_image",
    "set_section_content",
    "set_section_style",
    # Output
    "render_html",
    "render_text",
    "html_to_text",
    "serialize_config",
    "deserialize_config",
    # Boundary
    "ImageDecoder",
    "FileImageDecoder",
    "UrlImageDecoder",
    "attach_header_image",
    "FileExporter",
    "DownloadsExporter",
    "export_html",
    "export_config",
    # Settings
    "load_settings",
    "save_settings",
    # Errors
    "ComposerError",
    "ConfigError",
    "ExportError",
    "ImageIntakeError",
    "NotFoundError",
    "UnsupportedTemplateError",
]
