"""Input surface: named boolean flags set by the host on key down/up."""

import logging
from dataclasses import dataclass, fields
from typing import Dict

logger = logging.getLogger(__name__)

# Host key names (DOM-style codes) -> input flag
KEY_BINDINGS: Dict[str, str] = {
    "ArrowLeft": "left",
    "ArrowRight": "right",
    "ArrowDown": "down",
    "ArrowUp": "up",
    "Space": "fire",
}


@dataclass
class InputState:
    """Current held state of every control.

    left/right turn, down accelerates, up jumps, fire throws coffee.
    """

    left: bool = False
    right: bool = False
    down: bool = False
    up: bool = False
    fire: bool = False

    def set(self, name: str, pressed: bool) -> bool:
        """Set a flag by name. Unknown names are ignored.

        Returns:
            True if the flag exists
        """
        if name not in _FLAG_NAMES:
            logger.debug(f"Ignoring unknown input flag: {name}")
            return False
        setattr(self, name, bool(pressed))
        return True

    def set_key(self, key: str, pressed: bool) -> bool:
        """Set a flag from a host key code through KEY_BINDINGS."""
        flag = KEY_BINDINGS.get(key)
        if flag is None:
            return False
        return self.set(flag, pressed)

    def release_all(self) -> None:
        for name in _FLAG_NAMES:
            setattr(self, name, False)


_FLAG_NAMES = frozenset(f.name for f in fields(InputState))
