import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

import run_cli
from chat_checker.application import SearchOrchestrator
from chat_checker.domain import ErrorKind, Group
from chat_checker.infrastructure.config import SearchSettings, Settings, TwoChatSettings
from chat_checker.infrastructure.export import JsonExporter

from chat_fakes import FakeChatSource, make_error, make_messages

PHONE = "+6580910054"


class CliTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.source = FakeChatSource(
            groups={PHONE: [Group(uuid="g1", name="Team"), Group(uuid="g2", name="Family")]},
            pages={"g1": [make_messages("a", 2)], "g2": [make_error(ErrorKind.INVALID_REQUEST, 422)]},
        )
        self.settings = Settings(
            twochat=TwoChatSettings(api_key="k"),
            search=SearchSettings(predefined_numbers=(PHONE,), default_max_pages=10, max_workers=1),
            export_dir=Path(self.tmp.name),
        )
        patches = [
            patch.object(run_cli, "get_settings", return_value=self.settings),
            patch.object(run_cli, "build_orchestrator", return_value=SearchOrchestrator(self.source)),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, argv, inputs=None):
        out = io.StringIO()
        with redirect_stdout(out), patch("builtins.input", side_effect=inputs or []):
            code = run_cli.main(argv)
        return code, out.getvalue()


class TestCommands(CliTestCase):

    def test_groups_json(self):
        code, out = self.run_cli(["groups", PHONE, "--json"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["groupsCount"], 2)

    def test_groups_rejects_invalid_number(self):
        code, out = self.run_cli(["groups", "12345"])
        self.assertEqual(code, 1)
        self.assertIn("Invalid phone number format", out)
        self.assertEqual(self.source.list_calls, [])

    def test_history_export(self):
        code, out = self.run_cli(["history", "g1", "--export"])
        self.assertEqual(code, 0)
        self.assertIn("Found 2 messages", out)
        self.assertEqual(len(list(Path(self.tmp.name).glob("chat-history-g1-*.json"))), 1)

    def test_history_inaccessible_group(self):
        code, out = self.run_cli(["history", "g2"])
        self.assertEqual(code, 1)
        self.assertIn("INVALID_REQUEST failure", out)

    def test_search_all_json(self):
        code, out = self.run_cli(["search-all", "--title", "team", "--json"])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["numbersSearched"], 1)
        self.assertEqual(payload["matchingGroupsCount"], 1)

    def test_diagnose_prints_hints_for_422(self):
        self.source.groups[PHONE] = [Group(uuid="g2", name="Family")]
        code, out = self.run_cli(["diagnose", PHONE])
        self.assertEqual(code, 1)
        self.assertIn("group UUID is invalid or inaccessible", out)

    def test_check_config(self):
        code, out = self.run_cli(["check-config"])
        self.assertEqual(code, 0)
        self.assertIn("Configuration looks good!", out)


class TestInteractive(CliTestCase):

    def test_single_group_is_exported(self):
        code, out = self.run_cli([], inputs=[PHONE, "1"])

        self.assertEqual(code, 0)
        files = list(Path(self.tmp.name).glob("chat-history-g1-*.json"))
        self.assertEqual(len(files), 1)
        saved = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual(saved["messagesCount"], 2)
        self.assertIn("timestamp", saved)

    def test_all_groups_are_exported_with_failures(self):
        code, out = self.run_cli([], inputs=[PHONE, "all"])

        self.assertEqual(code, 0)
        files = list(Path(self.tmp.name).glob("all-groups-chat-history-*.json"))
        saved = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual(len(saved["results"]), 2)
        self.assertEqual(saved["results"][1]["errorType"], "ACCESS_DENIED")

    def test_invalid_choice(self):
        code, out = self.run_cli([], inputs=[PHONE, "7"])
        self.assertEqual(code, 1)
        self.assertIn("Invalid group number", out)

    def test_ctrl_c_during_fetch_exits_cleanly(self):
        self.source.fetch_message_page = MagicMock(side_effect=KeyboardInterrupt)

        code, out = self.run_cli([], inputs=[PHONE, "all"])

        self.assertEqual(code, 0)
        self.assertIn("Goodbye", out)
        self.assertEqual(list(Path(self.tmp.name).glob("*.json")), [])

    def test_ctrl_d_exits_cleanly(self):
        code, out = self.run_cli([], inputs=EOFError())
        self.assertEqual(code, 0)
        self.assertIn("Goodbye", out)


if __name__ == "__main__":
    unittest.main()
