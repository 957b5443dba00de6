# composer/errors.py


class ComposerError(Exception):
    """Base class for all composer failures."""


class NotFoundError(ComposerError, LookupError):
    """An operation referenced a section id that is not in the document."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Section not found: {section_id!r}")


class UnsupportedTemplateError(ComposerError, ValueError):
    """No template record is registered for the requested type."""

    def __init__(self, template_type: str):
        self.template_type = template_type
        super().__init__(f"No template registered for {template_type!r}")


class ConfigError(ComposerError, ValueError):
    """Configuration text could not be turned back into a document."""


class ImageIntakeError(ComposerError):
    """A header image could not be read or encoded."""


class ExportError(ComposerError):
    """An exported artifact could not be written."""
