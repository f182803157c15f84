"""Navigation feature gate.

Synopsis:
Decides whether the ``navigation`` feature stays in the admin feature list,
based on the persisted ``navigation_enabled`` toggle and the host
compatibility probe. Also owns the toggle-change reaction and the one-shot
opt-out marker.

Glossary:
- Toggle option: ``navigation_enabled``; ``"yes"`` enables, anything else disables.
- Opt-out flag: ``navigation_show_opt_out``; shown once, then deleted.
- Redirect intent: ``RedirectRequested`` value the host applies as a page reload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, List, Optional, Protocol

from .option_store import OptionStore

logger = logging.getLogger(__name__)

NAVIGATION_FEATURE = "navigation"
ENABLED_OPTION = "navigation_enabled"
SHOW_OPT_OUT_OPTION = "navigation_show_opt_out"
YES = "yes"
NO = "no"


class Probe(Protocol):
    def is_host_compatible(self) -> bool:
        ...


@dataclass(frozen=True)
class RedirectRequested:
    """Ask the host to reload *location* and stop handling the current request."""

    location: str


def filter_features(features: Collection[str], is_enabled_option: bool, is_compatible: bool) -> Collection[str]:
    """Drop ``navigation`` when the toggle is off or the host is incompatible.

    Pure: *features* is never mutated. Sets come back as sets, any other
    collection as a list.
    """
    has_feature = NAVIGATION_FEATURE in features
    disabled_by_option = not is_enabled_option
    incompatible = not is_compatible

    if (has_feature and disabled_by_option) or incompatible:
        if isinstance(features, (set, frozenset)):
            return features - {NAVIGATION_FEATURE}
        return [feature for feature in features if feature != NAVIGATION_FEATURE]
    return features


# --- FeatureGate ---
# Purpose: Bind the pure filter to an option store and a compatibility probe.
# Inputs: OptionStore for the toggle/opt-out keys; probe with is_host_compatible().
# Outputs: Filtered feature lists, preload keys, redirect intents, opt-out signal.
class FeatureGate:
    def __init__(self, options: OptionStore, probe: Probe) -> None:
        self.options = options
        self.probe = probe

    def is_option_enabled(self) -> bool:
        return self.options.get(ENABLED_OPTION, NO) == YES

    def is_compatible(self) -> bool:
        try:
            return bool(self.probe.is_host_compatible())
        except Exception as exc:
            logger.warning("Compatibility probe failed; disabling navigation: %s", exc)
            return False

    def maybe_remove_nav_feature(self, features: Collection[str]) -> Collection[str]:
        filtered = filter_features(features, self.is_option_enabled(), self.is_compatible())
        if NAVIGATION_FEATURE in features and NAVIGATION_FEATURE not in filtered:
            logger.debug("Navigation feature removed from admin features")
        return filtered

    def preload_options(self, options: List[str]) -> List[str]:
        """Add the toggle key to the options primed before render."""
        return [*options, ENABLED_OPTION]

    def reload_page_on_toggle(
        self, old_value: Optional[str], value: Optional[str], request_uri: Optional[str] = None
    ) -> Optional[RedirectRequested]:
        if old_value == value:
            return None

        if value != YES:
            self.options.set(SHOW_OPT_OUT_OPTION, YES)

        logger.info("Navigation toggle changed from %r to %r", old_value, value)
        if not request_uri:
            return None
        return RedirectRequested(location=request_uri)

    def consume_opt_out(self) -> bool:
        """Return True once after an opt-out, clearing the marker."""
        if self.options.get(SHOW_OPT_OUT_OPTION, NO) != YES:
            return False
        self.options.delete(SHOW_OPT_OUT_OPTION)
        return True


__all__ = [
    "ENABLED_OPTION",
    "NAVIGATION_FEATURE",
    "SHOW_OPT_OUT_OPTION",
    "FeatureGate",
    "RedirectRequested",
    "filter_features",
]
