from __future__ import annotations

import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from src.core import runtime_paths


class RuntimePathsTests(unittest.TestCase):
    def test_source_runtime_root_points_to_project(self) -> None:
        root = runtime_paths.runtime_root()
        self.assertTrue((root / "src").exists())
        self.assertEqual(runtime_paths.settings_path_default(), root / "settings.json")

    def test_frozen_runtime_root_uses_executable_parent(self) -> None:
        fake_exe = str(Path("C:/apps/PasteTransform/PasteTransform.exe"))
        with patch.object(sys, "frozen", True, create=True):
            with patch.object(sys, "executable", fake_exe):
                root = Path(fake_exe).resolve().parent
                self.assertEqual(runtime_paths.runtime_root(), root)
                self.assertEqual(runtime_paths.logs_dir(), root / "logs")
                self.assertEqual(runtime_paths.settings_path_default(), root / "settings.json")


if __name__ == "__main__":
    unittest.main()
