"""Navigation experience wiring.

Synopsis:
Registers the navigation gate's callbacks on a per-request ``HookRegistry``:
option preloading, the feature-list filter, the reload-on-toggle action, the
opt-out assets, and (only while navigation is enabled) the header placeholder
and the navigation stylesheet.

Glossary:
- Managed page: Admin page rendered by this application (see ``screen``).
- Admin features: Feature slugs filtered through ``admin_features``.
"""

from __future__ import annotations

import logging
from typing import Collection, Iterable, List, Optional

from markupsafe import Markup

from .hooks import HookRegistry
from .services.assets import AssetLoader, AssetQueue
from .services.feature_gate import ENABLED_OPTION, NAVIGATION_FEATURE, FeatureGate, RedirectRequested
from .services.screen import DEFAULT_MANAGED_PREFIX, is_managed_page

logger = logging.getLogger(__name__)

PRELOAD_OPTIONS_HOOK = "admin_preload_options"
FEATURES_HOOK = "admin_features"
UPDATE_TOGGLE_HOOK = f"update_option_{ENABLED_OPTION}"
ENQUEUE_HOOK = "admin_enqueue_scripts"
ADMIN_HEADER_HOOK = "in_admin_header"

NAVIGATION_HANDLE = "admin-navigation"
OPT_OUT_HANDLE = "admin-navigation-opt-out"
ADMIN_APP_HANDLE = "admin-app"
EMBED_ELEMENT_ID = "admin-embedded-navigation"


# --- NavigationIntegration ---
# Purpose: Compose FeatureGate with the host's hooks and asset loader.
# Inputs: FeatureGate, AssetLoader, default feature slugs, managed page prefix.
# Outputs: Hook registrations; enabled feature list for the request.
class NavigationIntegration:
    def __init__(
        self,
        gate: FeatureGate,
        loader: AssetLoader,
        *,
        default_features: Iterable[str] = (),
        managed_prefix: str = DEFAULT_MANAGED_PREFIX,
    ) -> None:
        self.gate = gate
        self.loader = loader
        self.default_features = set(default_features)
        self.managed_prefix = managed_prefix
        self.hooks: Optional[HookRegistry] = None

    def register(self, hooks: HookRegistry) -> HookRegistry:
        """Hook into the host, like the plugin constructor does on every request."""
        self.hooks = hooks
        hooks.add_filter(PRELOAD_OPTIONS_HOOK, self.gate.preload_options)
        hooks.add_filter(FEATURES_HOOK, self.gate.maybe_remove_nav_feature, priority=0)
        hooks.add_action(UPDATE_TOGGLE_HOOK, self.reload_page_on_toggle)
        hooks.add_action(ENQUEUE_HOOK, self.maybe_enqueue_opt_out_scripts)

        if self.is_feature_enabled(NAVIGATION_FEATURE):
            hooks.add_action(ADMIN_HEADER_HOOK, self.embed_navigation)
            hooks.add_action(ENQUEUE_HOOK, self.maybe_enqueue_scripts)
        return hooks

    def enabled_features(self) -> Collection[str]:
        if self.hooks is None:
            return self.gate.maybe_remove_nav_feature(self.default_features)
        return self.hooks.apply_filters(FEATURES_HOOK, set(self.default_features))

    def is_feature_enabled(self, feature: str) -> bool:
        return feature in self.enabled_features()

    def preloaded_options(self) -> List[str]:
        if self.hooks is None:
            return self.gate.preload_options([])
        return list(self.hooks.apply_filters(PRELOAD_OPTIONS_HOOK, []))

    def embed_navigation(self, page_path: str) -> Optional[Markup]:
        """Placeholder the navigation app mounts into on managed pages."""
        if not is_managed_page(page_path, self.managed_prefix):
            return None
        return Markup(f'<div id="{EMBED_ELEMENT_ID}"></div>')

    def maybe_enqueue_scripts(self, queue: AssetQueue, page_path: str) -> None:
        # Managed pages ship the navigation styles inside the main app bundle.
        if is_managed_page(page_path, self.managed_prefix):
            return

        rtl = "-rtl" if queue.rtl else ""
        queue.enqueue_style(
            NAVIGATION_HANDLE,
            self.loader.get_url(f"navigation/style{rtl}", "css"),
            (),
            self.loader.get_file_version("css"),
        )

    def reload_page_on_toggle(
        self, old_value: Optional[str], value: Optional[str], request_uri: Optional[str] = None
    ) -> Optional[RedirectRequested]:
        return self.gate.reload_page_on_toggle(old_value, value, request_uri)

    def maybe_enqueue_opt_out_scripts(self, queue: AssetQueue, page_path: str) -> None:
        if not self.gate.consume_opt_out():
            return

        rtl = ".rtl" if queue.rtl else ""
        queue.enqueue_style(
            OPT_OUT_HANDLE,
            self.loader.get_url(f"navigation-opt-out/style{rtl}", "css"),
            ("components",),
            self.loader.get_file_version("css"),
        )
        queue.enqueue_script(
            OPT_OUT_HANDLE,
            self.loader.get_url("admin-scripts/navigation-opt-out", "js"),
            ("i18n", "element", ADMIN_APP_HANDLE),
            self.loader.get_file_version("js"),
            in_footer=True,
        )
        logger.info("Queued navigation opt-out assets for %s", page_path)
