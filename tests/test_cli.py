import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

import tdlint


class CheckCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = self._tmp.name
        self.src = os.path.join(self.root, "plugin")
        os.makedirs(os.path.join(self.src, "__pycache__"))
        self.module = self.write(
            os.path.join(self.src, "labels.py"),
            "TITLE = __('Title')\nPOST = _x('Post', 'noun', 'my-plugin')\n",
        )
        self.write(os.path.join(self.src, "__pycache__", "stale.py"), "__('x')\n")
        self.write(os.path.join(self.src, "notes.txt"), "__('not python')\n")
        self.out = os.path.join(self.root, "out.json")

    def write(self, path, text):
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(text)
        return path

    def read(self, path):
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()

    def run_main(self, *argv):
        stderr = io.StringIO()
        stdout = io.StringIO()
        with contextlib.redirect_stderr(stderr), contextlib.redirect_stdout(stdout):
            code = tdlint.main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def test_check_reports_json(self) -> None:
        code, _, _ = self.run_main(
            "check", "--allowed-text-domain", "my-plugin", "--out", self.out, self.src
        )
        self.assertEqual(code, 1)
        results = json.loads(self.read(self.out))
        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual(result["message_id"], "missing")
        self.assertEqual(result["rule_id"], "i18n-text-domain")
        self.assertEqual(result["location"]["file"], self.module)
        self.assertEqual(result["location"]["line_start"], 1)
        self.assertEqual(result["fix"], {"kind": "insert", "range": [18, 18], "text": ", 'my-plugin'"})
        self.assertEqual(result["tool"], "tdlint")

    def test_fix_rewrites_files(self) -> None:
        code, _, _ = self.run_main(
            "check", "--fix", "--allowed-text-domain", "my-plugin", "--out", self.out, self.src
        )
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(self.read(self.out)), [])
        self.assertEqual(
            self.read(self.module),
            "TITLE = __('Title', 'my-plugin')\nPOST = _x('Post', 'noun', 'my-plugin')\n",
        )

    def test_fix_that_breaks_the_file_keeps_diagnostics(self) -> None:
        original = self.read(self.module)
        broken = ("TITLE = __('Title'\n", 1)
        with mock.patch.object(tdlint, "apply_fixes", return_value=broken):
            code, stdout, stderr = self.run_main(
                "check", "--fix", "--allowed-text-domain", "my-plugin", self.module
            )
        self.assertEqual(code, 1)
        self.assertEqual([r["message_id"] for r in json.loads(stdout)], ["missing"])
        self.assertEqual(self.read(self.module), original)
        self.assertIn("[tdlint] Discarding fixes", stderr)
        self.assertNotIn("Could not parse", stderr)

    def test_fix_rewrites_mixed_quote_concatenation(self) -> None:
        target = self.write(
            os.path.join(self.root, "joined.py"),
            "LABEL = __('Hello', 'other' \"-plugin\")\n",
        )
        code, stdout, stderr = self.run_main(
            "check", "--fix", "--allowed-text-domain", "my-plugin", target
        )
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(stdout), [])
        self.assertEqual(stderr, "")
        self.assertEqual(self.read(target), "LABEL = __('Hello', 'my-plugin')\n")

    def test_config_file_and_flags(self) -> None:
        config = self.write(
            os.path.join(self.root, "tdlint.yaml"),
            "allowedTextDomains: [my-plugin]\n",
        )
        code, _, _ = self.run_main("check", "--config", config, "--allow-default", self.module)
        self.assertEqual(code, 0)

    def test_text_format(self) -> None:
        code, stdout, _ = self.run_main(
            "check", "--format", "text", "--allowed-text-domain", "other", self.module
        )
        self.assertEqual(code, 1)
        lines = stdout.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual(
            lines[0],
            f"{self.module}:1:9: error Missing text domain [i18n-text-domain/missing] (fixable)",
        )
        self.assertIn("Invalid text domain 'my-plugin'", lines[1])

    def test_invalid_configuration_exits_with_two(self) -> None:
        config = self.write(os.path.join(self.root, "bad.yaml"), "allowDefault: maybe\n")
        code, _, stderr = self.run_main("check", "--config", config, self.src)
        self.assertEqual(code, 2)
        self.assertIn("[tdlint] Invalid configuration", stderr)

    def test_unparseable_and_missing_files_are_skipped(self) -> None:
        broken = self.write(os.path.join(self.root, "broken.py"), "__('Hello'\n")
        missing = os.path.join(self.root, "missing.py")
        code, stdout, stderr = self.run_main("check", "--allow-default", broken, missing)
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(stdout), [])
        self.assertIn(f"[tdlint] Could not parse {broken}", stderr)
        self.assertIn(f"[tdlint] Source path not found: {missing}", stderr)


if __name__ == "__main__":
    unittest.main()
