"""Action routing for the GraphLab API."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Protocol

LOGGER = logging.getLogger(__name__)


class ActionHandler(Protocol):
    """Callable taking the ``params`` mapping of a payload."""

    def __call__(self, params: dict) -> dict:  # pragma: no cover - interface
        ...


@dataclass
class ActionRouter:
    """Map action names to handlers and dispatch payload params to them."""

    registry: Dict[str, ActionHandler] = field(default_factory=dict)

    def register(self, action: str, handler: ActionHandler) -> None:
        """Register ``handler`` under ``action``, replacing any previous one."""

        if action in self.registry:
            LOGGER.debug("Replacing handler for action %s", action)
        self.registry[action] = handler

    def actions(self) -> List[str]:
        return sorted(self.registry)

    def dispatch(self, action: str, params: dict) -> dict:
        """Run the handler for ``action``; unknown actions raise ``KeyError``."""

        handler = self.registry.get(action)
        if handler is None:
            raise KeyError(f"Unknown action: {action}")
        LOGGER.debug("Dispatching %s with params %s", action, sorted(params))
        return handler(params)
