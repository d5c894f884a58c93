import os
import unittest
import tempfile
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication
from PySide6.QtTest import QTest
from PySide6.QtCore import Qt

from tests.fixtures import write_enabled, write_mod, write_png
from vramcounter.ui.main_window import MainWindow


class TestMainWindowUI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        # Ensure one QApplication exists
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.tmp = Path(self._td.name)
        self.window = MainWindow(settings_path=str(self.tmp / "settings.json"), mods_folder=str(self.tmp / "mods"))
        self.window.show()
        QTest.qWaitForWindowExposed(self.window)

    def tearDown(self):
        self.window.close()
        self._td.cleanup()

    def test_scan_updates_results_list(self):
        mods = self.tmp / "mods"
        mod = write_mod(mods, "Alpha", "alpha", name="Alpha")
        write_png(mod / "graphics" / "ships" / "a.png", (16, 16), mode="RGB")
        write_enabled(mods, ["alpha"])

        btn_scan = self.window.findChild(type(self.window.btn_scan), "btn_scan")
        QTest.mouseClick(btn_scan, Qt.LeftButton)

        results = self.window.findChild(type(self.window.results_list), "results_list")
        self.assertGreater(results.count(), 0)
        texts = [results.item(i).text() for i in range(results.count())]
        self.assertTrue(any("Alpha 1.0 (alpha)" in t for t in texts))

        log_box = self.window.findChild(type(self.window.log_box), "log_box")
        self.assertIn("SCAN", log_box.toPlainText())
        self.assertTrue(self.window.btn_copy.isEnabled())

    def test_save_settings_writes_file(self):
        self.window.cb_normal.setChecked(False)
        QTest.mouseClick(self.window.btn_save_settings, Qt.LeftButton)
        text = (self.tmp / "settings.json").read_text(encoding="utf-8")
        self.assertIn('"normalMapsEnabled": false', text)


if __name__ == "__main__":
    unittest.main()
