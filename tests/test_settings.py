import os
import unittest
from pathlib import Path
from unittest.mock import patch

from chat_checker.infrastructure.config import SearchSettings, Settings, TwoChatSettings
from chat_checker.infrastructure.config.settings import DEFAULT_PREDEFINED_NUMBERS


class TestSettings(unittest.TestCase):

    def test_reads_environment(self):
        env = {
            "API_KEY": "abc",
            "API_BASE_URL": "https://sandbox.test",
            "API_TIMEOUT_SECONDS": "12",
            "PORT": "8080",
            "APP_ENV": "production",
            "EXPORT_DIR": "/tmp/out",
            "DEFAULT_MAX_PAGES": "4",
            "SEARCH_MAX_WORKERS": "3",
            "PREDEFINED_NUMBERS": " +6580910054, +6580261704 ,,",
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        self.assertEqual(settings.twochat.api_key, "abc")
        self.assertEqual(settings.twochat.base_url, "https://sandbox.test")
        self.assertEqual(settings.twochat.timeout_seconds, 12)
        self.assertEqual(settings.server.port, 8080)
        self.assertFalse(settings.server.reload)
        self.assertEqual(settings.export_dir, Path("/tmp/out"))
        self.assertEqual(settings.search.default_max_pages, 4)
        self.assertEqual(settings.search.max_workers, 3)
        self.assertEqual(settings.search.predefined_numbers, ("+6580910054", "+6580261704"))

    def test_defaults(self):
        with patch.dict(os.environ, {"PREDEFINED_NUMBERS": "", "DEFAULT_MAX_PAGES": "not-a-number"}):
            settings = Settings()
        self.assertEqual(settings.search.predefined_numbers, DEFAULT_PREDEFINED_NUMBERS)
        self.assertEqual(settings.search.default_max_pages, 10)
        self.assertEqual(settings.twochat.api_key_header, "X-User-API-Key")

    def test_validate_reports_missing_key(self):
        settings = Settings(twochat=TwoChatSettings(api_key=""))
        issues = settings.validate()
        self.assertTrue(any("API_KEY" in issue for issue in issues))
        self.assertTrue(settings.has_errors)

    def test_validate_reports_invalid_numbers(self):
        settings = Settings(
            twochat=TwoChatSettings(api_key="k"),
            search=SearchSettings(predefined_numbers=("+6580910054", "6580261704"), max_workers=1, default_max_pages=10),
        )
        issues = settings.validate()
        self.assertEqual(len(issues), 1)
        self.assertIn("6580261704", issues[0])
        self.assertFalse(settings.has_errors)


if __name__ == "__main__":
    unittest.main()
