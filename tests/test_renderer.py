import unittest

from bs4 import BeautifulSoup

from composer.document import set_section_content, set_section_style
from composer.model import EmailDocument, Section, TextStyle, default_document
from composer.renderer import html_to_text, render_html, render_text
from composer.templates import apply_template


class TestRenderHTML(unittest.TestCase):
    def setUp(self):
        self.doc = default_document()
        self.html = render_html(self.doc)
        self.soup = BeautifulSoup(self.html, "html.parser")

    def test_page_structure(self):
        self.assertTrue(self.html.startswith("<!DOCTYPE html>\n<html>"))
        self.assertEqual(self.soup.title.string, self.doc.subject)
        img = self.soup.find("img")
        self.assertEqual(img["src"], self.doc.header_image)
        self.assertEqual(img["class"], ["header-image"])
        self.assertIn("max-width: 600px", self.html)
        self.assertIn("object-fit: cover", self.html)

    def test_sections_in_order(self):
        for t in ("meeting", "proposal", "followup", "introduction"):
            doc = apply_template(self.doc, t)
            soup = BeautifulSoup(render_html(doc), "html.parser")
            blocks = soup.select(".email-content > div")
            self.assertEqual(
                [b["class"][0] for b in blocks],
                ["section-1", "section-2", "section-3", "section-4", "section-5"],
            )

    def test_one_css_rule_per_section(self):
        for sid in self.doc.section_ids():
            self.assertEqual(self.html.count(f".section-{sid} {{"), 1)

    def test_css_values(self):
        doc = set_section_style(self.doc, "3", "color", "#112233")
        doc = set_section_style(doc, "3", "align", "right")
        doc = set_section_style(doc, "3", "bold", True)
        html = render_html(doc)
        rule = html.split(".section-3 {", 1)[1].split("}", 1)[0]
        self.assertIn("color: #112233;", rule)
        self.assertIn("font-size: 16px;", rule)
        self.assertIn("text-align: right;", rule)
        self.assertIn("font-weight: bold;", rule)

        rule = html.split(".section-4 {", 1)[1].split("}", 1)[0]
        self.assertIn("font-weight: normal;", rule)

    def test_line_breaks_match_newlines(self):
        for section in self.doc.sections:
            block = self.html.split(f'<div class="section-{section.id}">', 1)[1].split("</div>", 1)[0]
            self.assertEqual(block.count("<br>"), section.content.count("\n"))
        self.assertIn(
            "Best regards,<br>Sarah Wilson<br>Business Development Manager<br>Tech Solutions Inc.",
            self.html,
        )

    def test_content_is_not_escaped(self):
        doc = set_section_content(self.doc, "3", "Fish & <b>Chips</b>")
        self.assertIn("Fish & <b>Chips</b>", render_html(doc))

    def test_deterministic(self):
        self.assertEqual(render_html(self.doc), render_html(default_document()))

    def test_exact_output(self):
        doc = EmailDocument(
            subject="Hi",
            header_image="img.png",
            sections=(
                Section("7", "greeting", "Dear A,\nB"),
                Section("8", "closing", "Bye", TextStyle(color="#000", font_size="20px", align="center", bold=True)),
            ),
        )
        expected = (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            '  <meta charset="UTF-8">\n'
            "  <title>Hi</title>\n"
            "  <style>\n"
            "    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }\n"
            "    .container { max-width: 600px; margin: 0 auto; padding: 20px; }\n"
            "    .header-image { width: 100%; height: 200px; object-fit: cover; border-radius: 8px; }\n"
            "    .email-content { background: #ffffff; padding: 20px; border-radius: 8px; margin: 20px 0; }\n"
            "    .signature { border-top: 1px solid #eee; margin-top: 20px; padding-top: 20px; }\n"
            "    .section-7 {\n"
            "      color: #374151;\n"
            "      font-size: 16px;\n"
            "      text-align: left;\n"
            "      font-weight: normal;\n"
            "      margin-bottom: 1em;\n"
            "    }\n"
            "    .section-8 {\n"
            "      color: #000;\n"
            "      font-size: 20px;\n"
            "      text-align: center;\n"
            "      font-weight: bold;\n"
            "      margin-bottom: 1em;\n"
            "    }\n"
            "  </style>\n"
            "</head>\n"
            "<body>\n"
            '  <div class="container">\n'
            '    <img src="img.png" alt="Header" class="header-image">\n'
            '    <div class="email-content">\n'
            '      <div class="section-7">\n'
            "        Dear A,<br>B\n"
            "      </div>\n"
            '      <div class="section-8">\n'
            "        Bye\n"
            "      </div>\n"
            "    </div>\n"
            "  </div>\n"
            "</body>\n"
            "</html>\n"
        )
        self.assertEqual(render_html(doc), expected)

    def test_empty_document(self):
        html = render_html(EmailDocument())
        self.assertNotIn(".section-", html)
        self.assertIn('<div class="email-content">', html)


class TestTextRendering(unittest.TestCase):
    def test_render_text(self):
        doc = default_document()
        text = render_text(doc)
        self.assertTrue(text.startswith(doc.subject + "\n\nDear John,"))
        self.assertTrue(text.endswith("Tech Solutions Inc."))

    def test_html_to_text_reads_rendered_page(self):
        doc = default_document()
        self.assertEqual(html_to_text(render_html(doc)), render_text(doc))

    def test_html_to_text_plain_page(self):
        html = "<html><head><style>p {}</style></head><body><p>Hi<br>there</p></body></html>"
        self.assertEqual(html_to_text(html), "Hi\nthere")


if __name__ == "__main__":
    unittest.main()
