"""
Tests for YAML settings loading.
"""

import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from core.settings import load_settings


class TestSettings(unittest.TestCase):
    def test_bundled_settings_load(self) -> None:
        s = load_settings()
        self.assertTrue(s.db.url.startswith("sqlite:///"))
        self.assertEqual(s.assignments.sections, ["A", "B", "C", "D"])
        self.assertEqual(s.assignments.academic_year_span, 3)

    def test_optional_sections_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "settings.yaml"
            p.write_text(
                "app:\n  name: Test\n  environment: test\n"
                "db:\n  url: \"sqlite:///:memory:\"\n",
                encoding="utf-8",
            )
            s = load_settings(p)
        self.assertEqual(s.logging.level, "INFO")
        self.assertEqual(s.assignments.academic_year_span, 3)

    def test_bad_value_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "settings.yaml"
            p.write_text(
                "app:\n  name: Test\n  environment: test\n"
                "db:\n  url: \"sqlite:///:memory:\"\n"
                "assignments:\n  academic_year_span: many\n",
                encoding="utf-8",
            )
            with self.assertRaises(ValidationError):
                load_settings(p)


if __name__ == "__main__":
    unittest.main()
