from __future__ import annotations

import logging
import time

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from src.core.app_logging import default_log_file, set_debug_logging
from src.core.config import PasteTransformSettings, SettingsStore
from src.core.hotkey_controller import HotkeyController
from src.core.pipeline import PasteResult, PastePipeline
from src.core.text_inserter import TextInserter
from src.core.transformer import PasteTransformer

THEME = {
    "bg": "#071521",
    "text": "#ECF2FF",
    "muted": "#A9BBD6",
    "error": "#FF8A80",
    "border": "rgba(165, 190, 220, 90)",
    "input_bg": "rgba(4, 12, 22, 180)",
}


class UiBridge(QObject):
    paste_requested = Signal()
    status_changed = Signal(str)
    log_message = Signal(str)


class MainWindow(QMainWindow):
    def __init__(
        self,
        store: SettingsStore | None = None,
        settings: PasteTransformSettings | None = None,
    ) -> None:
        super().__init__()
        self.logger = logging.getLogger("paste_transform.ui")
        self.setWindowTitle("Paste Transform")
        self.resize(860, 620)

        self.bridge = UiBridge()
        self.bridge.paste_requested.connect(self._on_paste_requested)
        self.bridge.status_changed.connect(self._set_status_label)
        self.bridge.log_message.connect(self._append_log)

        self.store = store or SettingsStore.default()
        self.transformer = PasteTransformer(self.store, settings)
        self.inserter = TextInserter(restore_clipboard=self.transformer.settings.restore_clipboard)
        self.pipeline = PastePipeline(self.transformer, self.inserter)
        # keyboard calls back on its own listener thread; hop to the Qt thread.
        self.hotkey = HotkeyController(self.transformer.settings.hotkey, self.bridge.paste_requested.emit)

        self._build_ui()
        self._apply_theme()
        self._ui_log(f"Settings file: {self.store.path}")
        self._ui_log(f"Detailed log file: {default_log_file()}")
        self._show_compile_state()
        self._register_hotkey()

    def _build_ui(self) -> None:
        root = QWidget(self)
        root.setObjectName("root")
        layout = QVBoxLayout(root)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)
        self.setCentralWidget(root)

        title = QLabel("Paste Transform")
        title.setObjectName("heroTitle")
        layout.addWidget(title)
        self.status_label = QLabel("Status: Ready")
        self.status_label.setObjectName("statusLabel")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        form = QFormLayout()
        form.addRow("Paste with Transform:", QLabel(self.transformer.settings.hotkey.upper()))
        layout.addLayout(form)

        hint = QLabel(
            "Type regexp patterns in the left box and replace rules in the right box. "
            "Each line corresponds by number to a regex and its replacer. "
            "Replacers use $1, $2, ... for groups and $& for the whole match."
        )
        hint.setObjectName("hint")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        boxes = QHBoxLayout()
        self.patterns_input = QPlainTextEdit(root)
        self.patterns_input.setPlaceholderText("pattern 1\npattern 2\n")
        self.patterns_input.setPlainText(self.transformer.patterns_text())
        self.patterns_input.textChanged.connect(self._on_patterns_changed)
        self.replacers_input = QPlainTextEdit(root)
        self.replacers_input.setPlaceholderText("replacer 1\nreplacer 2\n")
        self.replacers_input.setPlainText(self.transformer.replacers_text())
        self.replacers_input.textChanged.connect(self._on_replacers_changed)
        for box in (self.patterns_input, self.replacers_input):
            box.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
            boxes.addWidget(box)
        layout.addLayout(boxes, 2)

        self.debug_mode = QCheckBox("Debug mode (log every replacement)")
        self.debug_mode.setChecked(self.transformer.settings.debug_mode)
        self.debug_mode.toggled.connect(self._on_debug_toggled)
        layout.addWidget(self.debug_mode)

        layout.addWidget(QLabel("System log:"))
        self.log_output = QTextEdit(root)
        self.log_output.setReadOnly(True)
        layout.addWidget(self.log_output, 1)

    def _apply_theme(self) -> None:
        self.setStyleSheet(
            f"""
            #root {{
                background: {THEME["bg"]};
            }}
            QWidget {{
                color: {THEME["text"]};
                font-size: 12px;
            }}
            #heroTitle {{
                font-size: 24px;
                font-weight: 700;
            }}
            #hint {{
                color: {THEME["muted"]};
            }}
            #statusLabel {{
                font-size: 14px;
                font-weight: 650;
            }}
            QPlainTextEdit, QTextEdit {{
                background: {THEME["input_bg"]};
                border: 1px solid {THEME["border"]};
                border-radius: 10px;
                font-family: "Consolas", monospace;
            }}
            QCheckBox {{
                spacing: 6px;
            }}
            """
        )

    def _on_patterns_changed(self) -> None:
        self.transformer.set_patterns(self.patterns_input.toPlainText())
        self._show_compile_state()

    def _on_replacers_changed(self) -> None:
        self.transformer.set_replacers(self.replacers_input.toPlainText())
        self._show_compile_state()

    def _on_debug_toggled(self, checked: bool) -> None:
        self.transformer.set_debug_mode(checked)
        set_debug_logging(checked)
        self._ui_log(f"Debug mode {'enabled' if checked else 'disabled'}.")

    def _show_compile_state(self) -> None:
        error = self.transformer.last_error
        if error is not None:
            self.status_label.setStyleSheet(f"color: {THEME['error']};")
            self.bridge.status_changed.emit(f"Status: {error} (previous rules still active)")
            return
        self.status_label.setStyleSheet("")
        settings = self.transformer.settings
        inert = max(len(settings.patterns), len(settings.replacers)) - settings.effective_rule_count
        status = f"Status: {len(self.transformer.rules)} rule(s) active"
        if inert:
            status += f", {inert} unpaired line(s) ignored"
        self.bridge.status_changed.emit(status)

    def _register_hotkey(self) -> None:
        try:
            self.hotkey.register()
            self._ui_log(f"Global hotkey active: {self.hotkey.hotkey.upper()} pastes with transform.")
        except Exception as exc:
            self._ui_log(f"Global hotkey registration failed: {exc}", level=logging.ERROR)

    def _on_paste_requested(self) -> None:
        try:
            result = self.pipeline.run()
        except Exception as exc:
            self.bridge.status_changed.emit("Status: Paste failed")
            self._ui_log(f"Paste with transform failed: {exc}", level=logging.ERROR)
            return
        self._report_paste(result)

    def _report_paste(self, result: PasteResult) -> None:
        if result.error:
            self._ui_log(f"Clipboard read failed: {result.error}", level=logging.WARNING)
        elif not result.inserted:
            self._ui_log("Nothing to paste.")
        elif self.transformer.settings.debug_mode:
            # Already written to the log file by the transformer.
            self.bridge.log_message.emit(f"Replaced '{result.source}' -> '{result.text}'")

    def _set_status_label(self, text: str) -> None:
        self.status_label.setText(text)

    def _append_log(self, text: str) -> None:
        self.log_output.append(f"[{time.strftime('%H:%M:%S')}] {text}")

    def _ui_log(self, text: str, level: int = logging.INFO) -> None:
        self.logger.log(level, text)
        self.bridge.log_message.emit(text)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.hotkey.unregister()
        super().closeEvent(event)
