"""Name-indexed collection of the engine's systems.

Systems are kept in registration order, which is also the order the
default pipeline calls them in. The registry exists for runtime toggling
and debug output; it never calls ``update`` itself.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from royale.systems.base import BaseSystem

logger = logging.getLogger(__name__)


class SystemRegistry:
    def __init__(self) -> None:
        self._by_name: Dict[str, "BaseSystem"] = {}

    def register(self, system: "BaseSystem") -> None:
        if system.name in self._by_name:
            raise ValueError(f"A system named {system.name!r} is already registered")
        self._by_name[system.name] = system
        logger.debug(f"Registered system {system.name} ({len(self._by_name)} total)")

    def get(self, name: str) -> Optional["BaseSystem"]:
        return self._by_name.get(name)

    def get_all(self) -> List["BaseSystem"]:
        return list(self._by_name.values())

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Toggle a system. Returns False if no system has that name."""
        system = self._by_name.get(name)
        if system is None:
            logger.warning(f"set_enabled: no system named {name!r}")
            return False
        system.enabled = enabled
        logger.info(f"{name} system {'enabled' if enabled else 'disabled'}")
        return True

    def get_debug_info(self) -> Dict[str, Any]:
        return {name: system.get_debug_info() for name, system in self._by_name.items()}

    def __len__(self) -> int:
        return len(self._by_name)
