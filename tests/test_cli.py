import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from tests.fixtures import write_enabled, write_mod, write_png
from vramcounter.cli import default_settings_path, main


class TestCli(unittest.TestCase):
    def test_run_writes_outputs(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td) / "mods"
            mod = write_mod(root, "Alpha", "alpha", name="Alpha")
            write_png(mod / "graphics" / "a.png", (16, 16), mode="RGB")
            write_enabled(root, ["alpha"])
            out = Path(td) / "out.txt"
            js = Path(td) / "estimate.json"
            html = Path(td) / "report.html"

            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                code = main([
                    "--mods-folder", str(root),
                    "--settings", str(Path(td) / "settings.json"),
                    "--output", str(out),
                    "--json", str(js),
                    "--html", str(html),
                    "--no-prompt",
                ])

            self.assertEqual(code, 0)
            self.assertIn("VRAM Use Estimates", out.read_text(encoding="utf-8"))
            self.assertIn("Folder: Alpha", out.read_text(encoding="utf-8"))
            self.assertEqual(json.loads(js.read_text(encoding="utf-8"))["total_bytes"], 1024)
            self.assertTrue(html.exists())
            self.assertIn("Alpha 1.0 (alpha) (1 images)", stdout.getvalue())

    def test_missing_mods_folder_exits_nonzero(self):
        with tempfile.TemporaryDirectory() as td:
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr), contextlib.redirect_stdout(io.StringIO()):
                code = main([
                    "--mods-folder", str(Path(td) / "missing"),
                    "--settings", str(Path(td) / "settings.json"),
                    "--output", str(Path(td) / "out.txt"),
                ])
            self.assertEqual(code, 1)
            self.assertIn("doesn't exist", stderr.getvalue())
            self.assertFalse((Path(td) / "out.txt").exists())

    def test_legacy_settings_picked_up(self):
        with tempfile.TemporaryDirectory() as td:
            cwd = Path(td)
            self.assertEqual(default_settings_path(cwd).name, "vram_counter_settings.json")
            (cwd / "config.properties").write_text("showSkippedFiles=false\n", encoding="utf-8")
            self.assertEqual(default_settings_path(cwd).name, "config.properties")


if __name__ == "__main__":
    unittest.main()
