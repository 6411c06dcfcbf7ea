from __future__ import annotations

from collections.abc import Callable


def _keyboard():
    import keyboard

    return keyboard


class HotkeyController:
    def __init__(self, hotkey: str, on_trigger: Callable[[], None]) -> None:
        self.hotkey = hotkey
        self.on_trigger = on_trigger
        self._handle = None

    @property
    def registered(self) -> bool:
        return self._handle is not None

    def register(self) -> None:
        if self._handle is not None:
            return
        # The hotkey keystroke itself is not forwarded to the focused window.
        self._handle = _keyboard().add_hotkey(
            self.hotkey, self.on_trigger, suppress=True, trigger_on_release=True
        )

    def unregister(self) -> None:
        if self._handle is None:
            return
        _keyboard().remove_hotkey(self._handle)
        self._handle = None
