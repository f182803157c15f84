"""Filter/action hook registry used by the admin host layer."""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

_Entry = Tuple[int, int, Callable[..., Any]]


class HookRegistry:
    """Named filters and actions, run in ascending priority then registration order."""

    def __init__(self) -> None:
        self._filters: Dict[str, List[_Entry]] = defaultdict(list)
        self._actions: Dict[str, List[_Entry]] = defaultdict(list)
        self._counter = itertools.count()

    def _add(self, table: Dict[str, List[_Entry]], name: str, callback: Callable[..., Any], priority: int) -> None:
        table[name].append((priority, next(self._counter), callback))
        table[name].sort(key=lambda entry: (entry[0], entry[1]))

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._add(self._filters, name, callback, priority)

    def add_action(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._add(self._actions, name, callback, priority)

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def has_action(self, name: str) -> bool:
        return bool(self._actions.get(name))

    def filter_callbacks(self, name: str) -> List[Callable[..., Any]]:
        return [entry[2] for entry in self._filters.get(name, [])]

    def action_callbacks(self, name: str) -> List[Callable[..., Any]]:
        return [entry[2] for entry in self._actions.get(name, [])]

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Thread *value* through every filter registered under *name*."""
        for _, _, callback in list(self._filters.get(name, [])):
            value = callback(value, *args)
        return value

    def do_action(self, name: str, *args: Any) -> List[Any]:
        """Run every action under *name*; return the non-None results in order."""
        results = []
        for _, _, callback in list(self._actions.get(name, [])):
            result = callback(*args)
            if result is not None:
                results.append(result)
        if not self._actions.get(name):
            logger.debug("No actions registered for %s", name)
        return results
