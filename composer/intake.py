# composer/intake.py

import base64
import http.client
import logging
import mimetypes
import ssl
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

import certifi

from composer.document import set_header_image
from composer.errors import ImageIntakeError
from composer.model import EmailDocument

logger = logging.getLogger(__name__)


USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0 Safari/537.36"
)

DEFAULT_MIME = "application/octet-stream"


def to_data_uri(data: bytes, mime: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime or DEFAULT_MIME};base64,{encoded}"


# ============================================================
# decoders
# ============================================================

class ImageDecoder:
    """
    Turns an image source into a data URI.

    The document never sees the bytes; it only stores the returned
    string. Implementations raise ImageIntakeError when the source
    cannot be read.
    """

    def read_data_uri(self, source: str) -> str:
        raise NotImplementedError


class FileImageDecoder(ImageDecoder):
    """Reads a local image file."""

    def read_data_uri(self, source: str) -> str:
        path = Path(source).expanduser()
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageIntakeError(f"Cannot read image {path}: {e}") from e

        mime, _ = mimetypes.guess_type(path.name)
        return to_data_uri(data, mime or DEFAULT_MIME)


class UrlImageDecoder(ImageDecoder):
    """Downloads a remote image so the exported page does not depend on it."""

    def __init__(self, timeout: int = 20):
        self.timeout = timeout

    def read_data_uri(self, source: str) -> str:
        scheme = urllib.parse.urlparse(source).scheme
        if scheme not in ("http", "https"):
            raise ImageIntakeError(f"Unsupported image URL: {source}")

        req = urllib.request.Request(
            source,
            headers={"User-Agent": USER_AGENT},
            method="GET",
        )
        context = ssl.create_default_context(cafile=certifi.where())

        try:
            with urllib.request.urlopen(req, timeout=self.timeout, context=context) as resp:
                if resp.status != 200:
                    raise ImageIntakeError(f"HTTP {resp.status} for {source}")
                data = resp.read()
                mime = resp.headers.get_content_type()
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise ImageIntakeError(f"Cannot download image {source}: {e}") from e

        if not mime or not mime.startswith("image/"):
            guessed, _ = mimetypes.guess_type(urllib.parse.urlparse(source).path)
            mime = guessed or mime
        return to_data_uri(data, mime)


def decoder_for(source: str) -> ImageDecoder:
    if urllib.parse.urlparse(source).scheme in ("http", "https"):
        return UrlImageDecoder()
    return FileImageDecoder()


# ============================================================
# public API
# ============================================================

def attach_header_image(doc: EmailDocument, decoder: ImageDecoder, source: str) -> EmailDocument:
    """
    Read an image through the decoder and store it as the header image.

    On failure ImageIntakeError propagates and the caller keeps the
    document it already had.
    """
    uri = decoder.read_data_uri(source)
    logger.info("Attached header image from %s (%d chars)", source, len(uri))
    return set_header_image(doc, uri)
