import os
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QFileDialog,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QSplitter,
    QMessageBox,
    QCheckBox
)

from vramcounter.config import APP_NAME, APP_VERSION, OUTPUT_FILE_NAME, SETTINGS_FILE_NAME
from vramcounter.core.engine import run_estimate
from vramcounter.core.progress import ProgressLog
from vramcounter.core.reporting import (
    build_output_text,
    build_report_html,
    build_summary_text,
    mods_by_impact,
    readable_size,
    write_report_html,
    write_text_output,
)
from vramcounter.core.scanner import ModsFolderNotFoundError
from vramcounter.core.settings import RunSettings, load_settings, save_settings
from vramcounter.ui.clipboard import copy_to_clipboard


class MainWindow(QMainWindow):
    def __init__(self, settings_path=None, mods_folder=None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} (v{APP_VERSION})")
        self.setMinimumSize(1020, 680)

        # State
        self._settings_path = settings_path or str(Path.cwd() / SETTINGS_FILE_NAME)
        self._last_report = None
        self._last_progress_text = ""

        # --- Root widget
        root = QWidget()
        self.setCentralWidget(root)

        main_layout = QVBoxLayout(root)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(10)

        # -------------------------
        # Top: mods folder row
        # -------------------------
        self.mods_edit = QLineEdit()
        self.mods_edit.setPlaceholderText("Select the game's mods folder...")
        self.mods_edit.setText(mods_folder or str(Path.cwd().parent))

        btn_mods = QPushButton("Browse...")
        btn_mods.clicked.connect(self.pick_mods_folder)

        mods_row = QHBoxLayout()
        mods_row.addWidget(QLabel("Mods folder:"))
        mods_row.addWidget(self.mods_edit, 1)
        mods_row.addWidget(btn_mods)

        main_layout.addLayout(mods_row)

        # -------------------------
        # GraphicsLib + display toggles
        # -------------------------
        self.cb_normal = QCheckBox("GraphicsLib normal maps")
        self.cb_material = QCheckBox("GraphicsLib material maps")
        self.cb_surface = QCheckBox("GraphicsLib surface maps")

        maps_row = QHBoxLayout()
        maps_row.addWidget(self.cb_normal)
        maps_row.addWidget(self.cb_material)
        maps_row.addWidget(self.cb_surface)
        maps_row.addStretch(1)

        self.cb_show_skipped = QCheckBox("Show skipped files")
        self.cb_show_counted = QCheckBox("Show counted files")
        self.cb_show_performance = QCheckBox("Show performance")
        self.cb_gfxlib_debug = QCheckBox("GraphicsLib debug output")

        display_row = QHBoxLayout()
        display_row.addWidget(self.cb_show_skipped)
        display_row.addWidget(self.cb_show_counted)
        display_row.addWidget(self.cb_show_performance)
        display_row.addWidget(self.cb_gfxlib_debug)
        display_row.addStretch(1)

        main_layout.addLayout(maps_row)
        main_layout.addLayout(display_row)

        # -------------------------
        # Buttons
        # -------------------------
        btn_row = QHBoxLayout()
        btn_row.addStretch(1)

        self.btn_scan = QPushButton("Scan")
        self.btn_scan.clicked.connect(self.on_scan_clicked)

        self.btn_save_settings = QPushButton("Save Settings")
        self.btn_save_settings.clicked.connect(self.on_save_settings_clicked)

        self.btn_copy = QPushButton("Copy Summary")
        self.btn_copy.setEnabled(False)  # enabled after Scan
        self.btn_copy.clicked.connect(self.on_copy_summary_clicked)

        self.btn_export = QPushButton("Export Report")
        self.btn_export.setEnabled(False)  # enabled after Scan
        self.btn_export.clicked.connect(self.on_export_report_clicked)

        btn_row.addWidget(self.btn_scan)
        btn_row.addWidget(self.btn_save_settings)
        btn_row.addWidget(self.btn_copy)
        btn_row.addWidget(self.btn_export)

        main_layout.addLayout(btn_row)

        # -------------------------
        # Bottom: Results + Logs
        # -------------------------
        splitter = QSplitter(Qt.Horizontal)

        results_panel = QWidget()
        results_layout = QVBoxLayout(results_panel)
        results_layout.setContentsMargins(0, 0, 0, 0)

        results_layout.addWidget(QLabel("Results"))
        self.results_list = QListWidget()
        results_layout.addWidget(self.results_list, 1)

        logs_panel = QWidget()
        logs_layout = QVBoxLayout(logs_panel)
        logs_layout.setContentsMargins(0, 0, 0, 0)

        logs_layout.addWidget(QLabel("Log"))
        self.log_box = QPlainTextEdit()
        self.log_box.setReadOnly(True)
        self.log_box.setPlaceholderText("Logs will appear here...")
        logs_layout.addWidget(self.log_box, 1)

        splitter.addWidget(results_panel)
        splitter.addWidget(logs_panel)
        splitter.setSizes([600, 420])

        main_layout.addWidget(splitter, 1)

        # Stable IDs for UI tests
        self.mods_edit.setObjectName("mods_edit")
        self.btn_scan.setObjectName("btn_scan")
        self.btn_copy.setObjectName("btn_copy")
        self.btn_export.setObjectName("btn_export")
        self.btn_save_settings.setObjectName("btn_save_settings")
        self.results_list.setObjectName("results_list")
        self.log_box.setObjectName("log_box")

        self._apply_settings_to_editor(self._load_settings())
        self.log("Ready. Choose the mods folder, then Scan.")

    # -------------------------
    # UI Helpers
    # -------------------------
    def log(self, msg: str):
        self.log_box.appendPlainText(msg)

    def add_result(self, level: str, message: str):
        text = f"[{level}] {message}"
        item = QListWidgetItem(text)

        lvl = level.upper().strip()
        if lvl == "ERROR":
            item.setForeground(Qt.red)
        elif lvl == "WARNING":
            item.setForeground(Qt.darkYellow)
        else:
            item.setForeground(Qt.darkGreen)

        self.results_list.addItem(item)

    def pick_mods_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select Mods Folder")
        if folder:
            self.mods_edit.setText(os.path.normpath(folder))
            self.log(f"Mods folder set: {folder}")

    def _load_settings(self) -> RunSettings:
        try:
            return load_settings(self._settings_path)
        except (OSError, ValueError) as e:
            self.log(f"Settings could not be read, using defaults: {e}")
            return RunSettings()

    def _apply_settings_to_editor(self, settings: RunSettings):
        # Unset GraphicsLib maps start checked; that is what the game defaults to.
        self.cb_normal.setChecked(settings.normal_maps_enabled is not False)
        self.cb_material.setChecked(settings.material_maps_enabled is not False)
        self.cb_surface.setChecked(settings.surface_maps_enabled is not False)

        self.cb_show_skipped.setChecked(settings.show_skipped_files)
        self.cb_show_counted.setChecked(settings.show_counted_files)
        self.cb_show_performance.setChecked(settings.show_performance)
        self.cb_gfxlib_debug.setChecked(settings.show_gfxlib_debug_output)

    def _read_settings_from_editor(self) -> RunSettings:
        return RunSettings(
            show_skipped_files=self.cb_show_skipped.isChecked(),
            show_counted_files=self.cb_show_counted.isChecked(),
            show_performance=self.cb_show_performance.isChecked(),
            show_gfxlib_debug_output=self.cb_gfxlib_debug.isChecked(),
            normal_maps_enabled=self.cb_normal.isChecked(),
            material_maps_enabled=self.cb_material.isChecked(),
            surface_maps_enabled=self.cb_surface.isChecked(),
        )

    # -------------------------
    # Scan
    # -------------------------
    def on_scan_clicked(self):
        self.results_list.clear()
        self._last_report = None
        self.btn_copy.setEnabled(False)
        self.btn_export.setEnabled(False)

        mods_path = self.mods_edit.text().strip()
        if not mods_path or not os.path.isdir(mods_path):
            QMessageBox.warning(self, "Missing Mods Folder", "Please choose a valid mods folder.")
            return

        settings = self._read_settings_from_editor()

        self.log("---- SCAN START ----")
        self.log(f"Mods folder: {mods_path}")

        # The editor always has every map chosen, so no prompt is needed.
        progress = ProgressLog()
        try:
            report = run_estimate(mods_path, settings, log=progress)
        except ModsFolderNotFoundError as e:
            self.add_result("ERROR", f"Scan failed: {e}")
            self.log(f"ERROR: {e}")
            return

        for line in progress.lines():
            self.log(line)

        self._last_report = report
        self._last_progress_text = progress.text()

        self.add_result("INFO", f"Scan OK: {len(report.mods)} mod(s), {len(report.enabled_mods)} enabled")
        self.add_result("INFO", f"Enabled + Disabled Mods w/o Vanilla: {readable_size(report.total_bytes)}")
        self.add_result("INFO", f"Enabled Mods w/o Vanilla: {readable_size(report.enabled_total_bytes)}")

        for mod in mods_by_impact(report):
            status = "enabled" if mod.enabled else "disabled"
            self.add_result(
                "INFO",
                f"  {mod.info.formatted_name} [{status}] ({mod.image_count} images): {readable_size(mod.total_bytes)}",
            )

        def _pri(i):
            return {"ERROR": 0, "WARNING": 1, "INFO": 2}.get(i.level.upper(), 3)

        for issue in sorted(report.issues, key=_pri):
            if issue.level.upper() == "INFO" and not settings.show_skipped_files:
                continue
            suffix = f" ({issue.relpath})" if issue.relpath else ""
            self.add_result(issue.level, f"{issue.code}: {issue.message}{suffix}")

        self.btn_copy.setEnabled(True)
        self.btn_export.setEnabled(True)
        self.log("---- SCAN DONE ----")

    # -------------------------
    # Outputs
    # -------------------------
    def on_copy_summary_clicked(self):
        if not self._last_report:
            QMessageBox.information(self, "Nothing to Copy", "Run Scan first.")
            return
        copy_to_clipboard(build_summary_text(self._last_report))
        self.log("Summary copied to clipboard, ready to paste.")

    def on_export_report_clicked(self):
        if not self._last_report:
            QMessageBox.information(self, "Nothing to Export", "Run Scan first so the tool has an estimate.")
            return

        folder = Path(self._settings_path).resolve().parent
        text_path = folder / OUTPUT_FILE_NAME
        report_path = folder / "VRAM_usage_of_mods.html"

        try:
            written_text = write_text_output(
                build_output_text(self._last_progress_text, self._last_report),
                str(text_path),
            )
            written_report = write_report_html(
                build_report_html(APP_NAME, APP_VERSION, self._last_report),
                str(report_path),
            )
        except OSError as e:
            self.add_result("ERROR", f"EXPORT_FAILED: {e}")
            QMessageBox.critical(self, "Export Failed", f"Export failed:\n{e}")
            return

        self.add_result("INFO", f"Text written: {written_text}")
        self.add_result("INFO", f"Report written: {written_report}")
        self.log(f"Report exported: {written_report}")
        QMessageBox.information(self, "Export Complete", f"Text:\n{written_text}\n\nReport:\n{written_report}")

    def on_save_settings_clicked(self):
        settings = self._read_settings_from_editor()
        try:
            path = save_settings(self._settings_path, settings)
        except OSError as e:
            QMessageBox.critical(self, "Save Failed", str(e))
            return
        self.add_result("INFO", f"Settings saved: {path}")
        self.log(f"Settings saved: {path}")
