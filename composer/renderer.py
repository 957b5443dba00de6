# composer/renderer.py

from typing import List

from bs4 import BeautifulSoup

from composer.model import EmailDocument, Section


# ============================================================
# helpers
# ============================================================

_LAYOUT_CSS = """\
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header-image { width: 100%; height: 200px; object-fit: cover; border-radius: 8px; }
    .email-content { background: #ffffff; padding: 20px; border-radius: 8px; margin: 20px 0; }
    .signature { border-top: 1px solid #eee; margin-top: 20px; padding-top: 20px; }"""


def _section_class(section: Section) -> str:
    return f"section-{section.id}"


def _section_rule(section: Section) -> str:
    style = section.style
    weight = "bold" if style.bold else "normal"
    return (
        f"    .{_section_class(section)} {{\n"
        f"      color: {style.color};\n"
        f"      font-size: {style.font_size};\n"
        f"      text-align: {style.align};\n"
        f"      font-weight: {weight};\n"
        f"      margin-bottom: 1em;\n"
        f"    }}"
    )


def _section_block(section: Section) -> str:
    # Content goes in as-is; only line breaks are translated.
    body = section.content.replace("\n", "<br>")
    return (
        f'      <div class="{_section_class(section)}">\n'
        f"        {body}\n"
        f"      </div>"
    )


# ============================================================
# public API
# ============================================================

def render_html(doc: EmailDocument) -> str:
    """
    Serialize the document into a standalone static HTML page.

    The output depends only on the document, so identical documents
    always render to identical text.
    """
    rules = "\n".join(_section_rule(s) for s in doc.sections)
    blocks = "\n".join(_section_block(s) for s in doc.sections)

    parts: List[str] = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '  <meta charset="UTF-8">',
        f"  <title>{doc.subject}</title>",
        "  <style>",
        _LAYOUT_CSS,
    ]
    if rules:
        parts.append(rules)
    parts += [
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="container">',
        f'    <img src="{doc.header_image}" alt="Header" class="header-image">',
        '    <div class="email-content">',
    ]
    if blocks:
        parts.append(blocks)
    parts += [
        "    </div>",
        "  </div>",
        "</body>",
        "</html>",
    ]
    return "\n".join(parts) + "\n"


def render_text(doc: EmailDocument) -> str:
    """Plain-text view: one paragraph per section, blank line between."""
    return "\n\n".join(s.content for s in doc.sections)


def html_to_text(html: str) -> str:
    """
    Read a page produced by render_html back into plain text.

    Each section div becomes one paragraph, with <br> turned back into
    newlines. Pages without section divs fall back to the visible text
    of the body.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    for br in soup.find_all("br"):
        br.replace_with("\n")

    blocks = soup.select(".email-content > div")
    if not blocks:
        for tag in soup(["style", "script", "title"]):
            tag.decompose()
        return soup.get_text().strip()

    return "\n\n".join(b.get_text().strip() for b in blocks)
