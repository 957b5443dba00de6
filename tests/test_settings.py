import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from composer.document import set_field
from composer.model import default_document
from composer.settings import (
    SCHEMA_VERSION,
    default_settings,
    load_settings,
    new_document,
    save_settings,
    settings_path,
)


class TestSettingsFile(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / "settings.json"

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_settings(self.path), default_settings())

    def test_save_and_load(self):
        settings = default_settings()
        settings["sender_name"] = "Bob"
        save_settings(settings, self.path)
        loaded = load_settings(self.path)
        self.assertEqual(loaded["sender_name"], "Bob")
        self.assertEqual(loaded["schema_version"], SCHEMA_VERSION)

    def test_corrupt_file_gives_defaults(self):
        self.path.write_text("{broken", encoding="utf-8")
        with self.assertLogs("composer.settings", level="WARNING"):
            self.assertEqual(load_settings(self.path), default_settings())

    def test_missing_and_invalid_keys_are_filled(self):
        self.path.write_text(
            json.dumps({"sender_name": "Bob", "company_name": 42, "default_template": "bogus"}),
            encoding="utf-8",
        )
        with self.assertLogs("composer.settings", level="WARNING"):
            loaded = load_settings(self.path)
        self.assertEqual(loaded["sender_name"], "Bob")
        self.assertEqual(loaded["company_name"], "Tech Solutions Inc.")
        self.assertEqual(loaded["default_template"], "meeting")
        self.assertEqual(loaded["export_dir"], "")

    def test_env_override(self):
        with patch.dict(os.environ, {"COMPOSER_DATA_DIR": self.tmpdir.name}):
            self.assertEqual(settings_path().parent, Path(self.tmpdir.name))


class TestNewDocument(unittest.TestCase):
    def test_defaults_give_builtin_draft(self):
        self.assertEqual(new_document(), default_document())
        self.assertEqual(new_document(default_settings()), default_document())

    def test_sender_profile_applied(self):
        settings = default_settings()
        settings.update(sender_name="Bob", sender_role="CEO", company_name="Acme")
        doc = new_document(settings)
        self.assertEqual(doc.sender_name, "Bob")
        self.assertEqual(doc.sections[-1].content, "Best regards,\nBob\nCEO\nAcme")

    def test_default_template(self):
        settings = default_settings()
        settings["default_template"] = "proposal"
        doc = new_document(settings)
        self.assertEqual(doc.template_type, "proposal")
        self.assertEqual(doc.sections[0].content, "Business Proposal: [Project Name]")

    def test_custom_template_keeps_draft_with_sender_signature(self):
        settings = default_settings()
        settings.update(sender_name="Bob", default_template="custom")
        doc = new_document(settings)
        self.assertEqual(doc.template_type, "custom")
        self.assertEqual(doc.sender_name, "Bob")
        self.assertEqual(
            doc.sections[-1].content,
            "Best regards,\nBob\nBusiness Development Manager\nTech Solutions Inc.",
        )
        self.assertEqual(doc.sections[:-1], default_document().sections[:-1])

        doc = set_field(doc, "senderName", "Carl")
        self.assertIn("\nCarl\n", doc.sections[-1].content)

    def test_header_image(self):
        settings = default_settings()
        settings["header_image"] = "https://example.com/logo.png"
        doc = new_document(settings)
        self.assertEqual(doc.header_image, "https://example.com/logo.png")
        self.assertEqual(doc.sections, default_document().sections)


if __name__ == "__main__":
    unittest.main()
