import tempfile
import unittest
from pathlib import Path

from vramcounter.core.mod_info import loads_lenient, read_enabled_mod_ids, read_mod_info


class TestModInfo(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)

    def tearDown(self):
        self._td.cleanup()

    def _write(self, text, folder="mod"):
        mod = self.root / folder
        mod.mkdir(parents=True, exist_ok=True)
        (mod / "mod_info.json").write_text(text, encoding="utf-8")
        return mod

    def test_legacy_schema(self):
        mod = self._write('{"id": "lw_console", "name": "Console Commands", "version": "2021.4.10"}')
        info, issue = read_mod_info(str(mod))
        self.assertIsNone(issue)
        self.assertEqual((info.id, info.name, info.version), ("lw_console", "Console Commands", "2021.4.10"))
        self.assertEqual(info.formatted_name, "Console Commands 2021.4.10 (lw_console)")

    def test_current_schema(self):
        mod = self._write('{"id": "x", "name": "X", "version": {"major": 1, "minor": "4", "patch": 0}}')
        info, _ = read_mod_info(str(mod))
        self.assertEqual(info.version, "1.4.0")

    def test_lenient_json(self):
        text = """
        {
            # comment
            "id": "x", // trailing comment
            /* block */
            "name": "http://example.com/#not-a-comment",
            "version": "1.0",
        }
        """
        data = loads_lenient(text)
        self.assertEqual(data["name"], "http://example.com/#not-a-comment")
        self.assertEqual(data["version"], "1.0")

    def test_missing_and_invalid(self):
        empty = self.root / "empty"
        empty.mkdir()
        info, issue = read_mod_info(str(empty))
        self.assertIsNone(info)
        self.assertEqual(issue.code, "MOD_INFO_MISSING")

        mod = self._write("{not json at all", folder="broken")
        info, issue = read_mod_info(str(mod))
        self.assertIsNone(info)
        self.assertEqual(issue.code, "MOD_INFO_INVALID")

        mod = self._write('{"name": "No id"}', folder="noid")
        info, issue = read_mod_info(str(mod))
        self.assertIsNone(info)
        self.assertEqual(issue.code, "MOD_INFO_INVALID")

    def test_enabled_mods(self):
        ids, issue = read_enabled_mod_ids(str(self.root))
        self.assertIsNone(ids)
        self.assertEqual(issue.code, "ENABLED_MODS_MISSING")

        (self.root / "enabled_mods.json").write_text('{"enabledMods": ["a", "shaderLib",]}', encoding="utf-8")
        ids, issue = read_enabled_mod_ids(str(self.root))
        self.assertIsNone(issue)
        self.assertEqual(ids, ["a", "shaderLib"])

        (self.root / "enabled_mods.json").write_text('{"mods": []}', encoding="utf-8")
        ids, issue = read_enabled_mod_ids(str(self.root))
        self.assertIsNone(ids)
        self.assertEqual(issue.code, "ENABLED_MODS_INVALID")


if __name__ == "__main__":
    unittest.main()
