# composer/export.py

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from composer.config_io import serialize_config
from composer.errors import ExportError
from composer.model import EmailDocument
from composer.renderer import render_html

logger = logging.getLogger(__name__)


HTML_FILENAME = "business-email.html"
CONFIG_FILENAME = "email-template.json"


# ============================================================
# helpers
# ============================================================

def default_export_dir() -> Path:
    downloads = Path.home() / "Downloads"
    return downloads if downloads.exists() and downloads.is_dir() else Path.cwd()


def unique_path(dest_dir: Path, filename: str) -> Path:
    """business-email.html, then business-email (1).html, (2), ..."""
    path = dest_dir / filename
    stem, suffix = path.stem, path.suffix
    counter = 1
    while path.exists():
        path = dest_dir / f"{stem} ({counter}){suffix}"
        counter += 1
    return path


def atomic_write_text(path: Path, text: str) -> None:
    """
    Write text to a temp file next to path, then move it into place.

    A crash halfway through never leaves a truncated file behind.
    """
    parent = path.parent
    tmp_path = None

    try:
        parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(parent),
            prefix=path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))

    except Exception:
        if tmp_path and tmp_path.exists():
            tmp_path.unlink()
        raise


# ============================================================
# exporters
# ============================================================

class FileExporter:
    """Takes generated text and makes it available under a file name."""

    def write(self, filename: str, text: str) -> Path:
        raise NotImplementedError


class DownloadsExporter(FileExporter):
    """
    Saves into the user's Downloads folder (or a configured folder),
    never overwriting an earlier export.
    """

    def __init__(self, dest_dir: Optional[Union[str, Path]] = None):
        self.dest_dir = Path(dest_dir).expanduser() if dest_dir else default_export_dir()

    def write(self, filename: str, text: str) -> Path:
        path = unique_path(self.dest_dir, filename)
        atomic_write_text(path, text)
        return path


# ============================================================
# public API
# ============================================================

def _export(exporter: FileExporter, filename: str, text: str) -> Path:
    try:
        path = exporter.write(filename, text)
    except OSError as e:
        raise ExportError(f"Failed to export {filename}: {e}") from e
    logger.info("Exported %s", path)
    return path


def export_html(doc: EmailDocument, exporter: FileExporter) -> Path:
    return _export(exporter, HTML_FILENAME, render_html(doc))


def export_config(doc: EmailDocument, exporter: FileExporter) -> Path:
    return _export(exporter, CONFIG_FILENAME, serialize_config(doc))
