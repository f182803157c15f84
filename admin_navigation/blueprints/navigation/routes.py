import logging

from flask import current_app, g, jsonify, redirect, render_template, request, url_for
from markupsafe import Markup

from ... import get_option_store
from ...navigation import ADMIN_HEADER_HOOK, ENQUEUE_HOOK, UPDATE_TOGGLE_HOOK
from ...services.assets import AssetQueue
from ...services.feature_gate import ENABLED_OPTION, NAVIGATION_FEATURE, NO, YES, RedirectRequested
from ...services.option_store import OptionStoreError
from ...utils.http import safe_local_path, wants_json
from . import navigation_bp

logger = logging.getLogger(__name__)

TOGGLE_VALUES = {YES, NO}


def _preloaded_option_values():
    store = get_option_store(current_app)
    return {key: store.get(key) for key in g.navigation.preloaded_options()}


def _render_admin_page(template: str, **context):
    navigation = g.navigation
    page_path = request.path
    queue = AssetQueue(rtl=current_app.config.get("ADMIN_RTL", False))
    navigation.hooks.do_action(ENQUEUE_HOOK, queue, page_path)
    header = Markup("").join(navigation.hooks.do_action(ADMIN_HEADER_HOOK, page_path))

    return render_template(
        template,
        page_path=page_path,
        admin_header=header,
        styles=queue.styles,
        header_scripts=queue.header_scripts(),
        footer_scripts=queue.footer_scripts(),
        features=sorted(navigation.enabled_features()),
        preloaded_options=_preloaded_option_values(),
        **context,
    )


@navigation_bp.route("/")
@navigation_bp.route("/<path:page>")
def admin_page(page=""):
    """Any admin screen; the navigation shell decides what gets embedded."""
    return _render_admin_page("navigation/page.html", page=page)


@navigation_bp.route("/settings/navigation", methods=["GET"])
def settings():
    store = get_option_store(current_app)
    return _render_admin_page(
        "navigation/settings.html",
        navigation_enabled=store.get(ENABLED_OPTION, NO),
        compatible=g.navigation.gate.is_compatible(),
    )


@navigation_bp.route("/settings/navigation", methods=["POST"])
def update_settings():
    payload = request.get_json(silent=True) if request.is_json else request.form
    if not hasattr(payload, "get"):
        payload = {}
    value = str(payload.get(ENABLED_OPTION) or "").strip().lower()
    if value not in TOGGLE_VALUES:
        message = f"{ENABLED_OPTION} must be one of {sorted(TOGGLE_VALUES)}"
        if wants_json():
            return jsonify({"success": False, "error": message}), 400
        return message, 400

    if not g.navigation.gate.is_compatible():
        message = "Navigation is not available on this host; the setting was not changed"
        if wants_json():
            return jsonify({"success": False, "error": message}), 409
        return message, 409

    return_to = safe_local_path(payload.get("next")) or url_for("navigation.settings")
    store = get_option_store(current_app)

    try:
        old_value = store.get(ENABLED_OPTION, NO)
        store.set(ENABLED_OPTION, value)
        results = g.navigation.hooks.do_action(UPDATE_TOGGLE_HOOK, old_value, value, return_to)
    except OptionStoreError as exc:
        logger.error("Navigation toggle update failed: %s", exc)
        if wants_json():
            return jsonify({"success": False, "error": "Unable to save navigation setting"}), 500
        return "Unable to save navigation setting", 500

    intent = next((result for result in results if isinstance(result, RedirectRequested)), None)
    if wants_json():
        return jsonify(
            {
                "success": True,
                "navigation_enabled": value,
                "changed": old_value != value,
                "redirect": intent.location if intent else None,
            }
        )
    return redirect(intent.location if intent else return_to)


@navigation_bp.route("/api/navigation")
def navigation_status():
    navigation = g.navigation
    features = navigation.enabled_features()
    return jsonify(
        {
            "features": sorted(features),
            "navigation": NAVIGATION_FEATURE in features,
            "navigation_enabled": navigation.gate.is_option_enabled(),
            "compatible": navigation.gate.is_compatible(),
            "preload_options": _preloaded_option_values(),
        }
    )
