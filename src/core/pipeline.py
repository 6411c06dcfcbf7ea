from __future__ import annotations

import logging
from dataclasses import dataclass

from src.core.text_inserter import TextInserter
from src.core.transformer import PasteTransformer


@dataclass
class PasteResult:
    source: str
    text: str
    inserted: bool
    error: str | None = None


class PastePipeline:
    def __init__(
        self,
        transformer: PasteTransformer,
        inserter: TextInserter,
    ) -> None:
        self.transformer = transformer
        self.inserter = inserter
        self.logger = logging.getLogger("paste_transform.pipeline")

    def run(self) -> PasteResult:
        """Paste the transformed clipboard text at the cursor.

        An empty clipboard or an empty transform result pastes nothing, so a
        selection in the target window is left in place rather than deleted.
        """
        try:
            source = self.inserter.read_clipboard()
        except Exception as exc:
            self.logger.warning("Clipboard read failed: %s", exc)
            return PasteResult(source="", text="", inserted=False, error=str(exc))

        if not source:
            self.logger.info("Clipboard is empty, nothing to paste.")
            return PasteResult(source="", text="", inserted=False)

        text = self.transformer.transform(source)
        if not text:
            self.logger.info("Rules produced empty text, selection left untouched.")
            return PasteResult(source=source, text=text, inserted=False)

        self.inserter.insert_text_at_cursor(text)
        self.logger.info(
            "Pasted transformed text. source_chars=%s result_chars=%s",
            len(source),
            len(text),
        )
        return PasteResult(source=source, text=text, inserted=True)
