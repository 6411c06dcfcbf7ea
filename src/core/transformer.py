from __future__ import annotations

import logging

from src.core.config import PasteTransformSettings, SettingsStore
from src.core.rules import InvalidPatternError, Rule, apply_rules, compile_rules


def split_lines(value: str) -> list[str]:
    values = value.split("\n")
    if values and values[-1] == "":
        values.pop()
    return values


def join_lines(values: list[str]) -> str:
    return "".join(f"{value}\n" for value in values)


class PasteTransformer:
    """Owns the rule-set settings and the rules compiled from them.

    Every edit is persisted and then recompiled. When a pattern does not
    compile, the previously compiled rules stay in effect and the error is
    kept in ``last_error`` until a later edit compiles cleanly.
    """

    def __init__(
        self,
        store: SettingsStore,
        settings: PasteTransformSettings | None = None,
    ) -> None:
        self.store = store
        self.settings = settings if settings is not None else store.load()
        self.rules: list[Rule] = []
        self.last_error: InvalidPatternError | None = None
        self.logger = logging.getLogger("paste_transform.transformer")
        try:
            self.recompile()
        except InvalidPatternError:
            # Start with no rules; the error stays in last_error for the UI.
            self.rules = []

    def recompile(self) -> list[Rule]:
        try:
            rules = compile_rules(self.settings.patterns, self.settings.replacers)
        except InvalidPatternError as exc:
            self.last_error = exc
            self.logger.warning("Rule compilation failed, keeping previous rules: %s", exc)
            raise
        self.rules = rules
        self.last_error = None
        self.logger.info("Compiled %s rule(s).", len(rules))
        return rules

    def set_patterns(self, text: str) -> bool:
        self.settings.patterns = split_lines(text)
        return self._persist_and_recompile()

    def set_replacers(self, text: str) -> bool:
        self.settings.replacers = split_lines(text)
        return self._persist_and_recompile()

    def set_debug_mode(self, enabled: bool) -> None:
        self.settings.debug_mode = enabled
        self.store.save(self.settings)

    def patterns_text(self) -> str:
        return join_lines(self.settings.patterns)

    def replacers_text(self) -> str:
        return join_lines(self.settings.replacers)

    def transform(self, source: str | None) -> str:
        result = apply_rules(self.rules, source)
        if self.settings.debug_mode:
            self.logger.info("Replaced '%s' -> '%s'", source, result)
        return result

    def _persist_and_recompile(self) -> bool:
        self.store.save(self.settings)
        try:
            self.recompile()
        except InvalidPatternError:
            return False
        return True
