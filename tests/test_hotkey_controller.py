from __future__ import annotations

import unittest
from unittest.mock import Mock, patch

from src.core.hotkey_controller import HotkeyController


class HotkeyControllerTests(unittest.TestCase):
    @patch("src.core.hotkey_controller._keyboard")
    def test_register_binds_once(self, keyboard_factory) -> None:
        keyboard_mock = Mock()
        keyboard_mock.add_hotkey.return_value = "handle"
        keyboard_factory.return_value = keyboard_mock
        callback = Mock()
        controller = HotkeyController("ctrl+shift+v", callback)

        controller.register()
        controller.register()

        keyboard_mock.add_hotkey.assert_called_once()
        args, kwargs = keyboard_mock.add_hotkey.call_args
        self.assertEqual(args, ("ctrl+shift+v", callback))
        self.assertTrue(kwargs["suppress"])
        self.assertTrue(controller.registered)

    @patch("src.core.hotkey_controller._keyboard")
    def test_unregister_removes_hotkey(self, keyboard_factory) -> None:
        keyboard_mock = Mock()
        keyboard_mock.add_hotkey.return_value = "handle"
        keyboard_factory.return_value = keyboard_mock
        controller = HotkeyController("ctrl+shift+v", Mock())
        controller.register()

        controller.unregister()
        controller.unregister()

        keyboard_mock.remove_hotkey.assert_called_once_with("handle")
        self.assertFalse(controller.registered)


if __name__ == "__main__":
    unittest.main()
