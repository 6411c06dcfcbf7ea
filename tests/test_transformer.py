from __future__ import annotations

import shutil
import unittest
import uuid
from pathlib import Path

from src.core.config import PasteTransformSettings, SettingsStore
from src.core.rules import InvalidPatternError
from src.core.transformer import PasteTransformer, join_lines, split_lines


class LineHelpersTests(unittest.TestCase):
    def test_split_drops_single_trailing_empty_line(self) -> None:
        self.assertEqual(split_lines("a\nb\n"), ["a", "b"])
        self.assertEqual(split_lines("a\nb\n\n"), ["a", "b", ""])
        self.assertEqual(split_lines(""), [])

    def test_join_adds_trailing_newline(self) -> None:
        self.assertEqual(join_lines(["a", "b"]), "a\nb\n")
        self.assertEqual(join_lines([]), "")


class PasteTransformerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = Path(".test_tmp") / f"transformer_{uuid.uuid4().hex}"
        self.tmp.mkdir(parents=True, exist_ok=True)
        self.store = SettingsStore(self.tmp / "settings.json")

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_loads_and_compiles_default_rules(self) -> None:
        transformer = PasteTransformer(self.store)

        self.assertEqual(len(transformer.rules), 4)
        self.assertIsNone(transformer.last_error)
        self.assertEqual(
            transformer.transform("https://en.wikipedia.org/wiki/Turing_machine"),
            "[📖 Turing_machine](https://en.wikipedia.org/wiki/Turing_machine)",
        )

    def test_edit_recompiles_and_persists(self) -> None:
        transformer = PasteTransformer(self.store)

        self.assertTrue(transformer.set_patterns("foo\nbar\n"))
        self.assertTrue(transformer.set_replacers("FOO\n"))

        self.assertEqual(len(transformer.rules), 1)
        self.assertEqual(transformer.transform("foo bar"), "FOO bar")
        reloaded = self.store.load()
        self.assertEqual(reloaded.patterns, ["foo", "bar"])
        self.assertEqual(reloaded.replacers, ["FOO"])

    def test_invalid_edit_keeps_previous_rules_but_saves_text(self) -> None:
        transformer = PasteTransformer(self.store)
        previous = transformer.rules

        ok = transformer.set_patterns("(broken\n")

        self.assertFalse(ok)
        self.assertIs(transformer.rules, previous)
        self.assertIsInstance(transformer.last_error, InvalidPatternError)
        self.assertEqual(transformer.last_error.index, 0)
        self.assertEqual(self.store.load().patterns, ["(broken"])
        self.assertEqual(
            transformer.transform("https://github.com/acme/widget"),
            "[🐈‍⬛ widget](https://github.com/acme/widget)",
        )

    def test_fixing_pattern_clears_error(self) -> None:
        transformer = PasteTransformer(self.store)
        transformer.set_patterns("(broken\n")

        self.assertTrue(transformer.set_patterns("(fixed)\n"))

        self.assertIsNone(transformer.last_error)
        self.assertEqual(len(transformer.rules), 1)

    def test_recompile_raises_on_invalid_pattern(self) -> None:
        settings = PasteTransformSettings(patterns=["ok", "[bad"], replacers=["1", "2"])
        transformer = PasteTransformer(self.store, settings=settings)

        self.assertEqual(transformer.rules, [])
        with self.assertRaises(InvalidPatternError):
            transformer.recompile()

    def test_none_source_transforms_to_empty(self) -> None:
        transformer = PasteTransformer(self.store)

        self.assertEqual(transformer.transform(None), "")

    def test_debug_mode_logs_replacement(self) -> None:
        transformer = PasteTransformer(self.store)
        transformer.set_debug_mode(True)

        with self.assertLogs("paste_transform.transformer", level="INFO") as logs:
            transformer.transform("https://github.com/acme/widget/issues/42")

        self.assertTrue(any("Replaced 'https://github.com/acme/widget/issues/42'" in line for line in logs.output))
        self.assertTrue(self.store.load().debug_mode)

    def test_text_views_round_trip_settings(self) -> None:
        settings = PasteTransformSettings(patterns=["a", "b"], replacers=["x", "y"])
        transformer = PasteTransformer(self.store, settings=settings)

        self.assertEqual(transformer.patterns_text(), "a\nb\n")
        self.assertTrue(transformer.set_replacers(transformer.replacers_text()))
        self.assertEqual(transformer.settings.replacers, ["x", "y"])


if __name__ == "__main__":
    unittest.main()
