import logging
import os
from typing import Any

from flask import Flask, g, request

from .config import ENV_DIAGNOSTICS, config_map, get_config
from .extensions import csrf, db
from .hooks import HookRegistry
from .logging_config import configure_logging
from .navigation import NavigationIntegration
from .services.assets import AssetLoader
from .services.compatibility import CompatibilityProbe
from .services.feature_gate import FeatureGate
from .services.option_store import DatabaseOptionStore, OptionStore, build_option_store

logger = logging.getLogger(__name__)

OPTION_STORE_EXTENSION = "admin_navigation.options"
PROBE_EXTENSION = "admin_navigation.probe"


def create_app(config: dict[str, Any] | None = None, *, config_name: str | None = None) -> Flask:
    app = Flask(__name__)
    os.makedirs(app.instance_path, exist_ok=True)

    _load_base_config(app, config, config_name)

    db.init_app(app)
    csrf.init_app(app)

    store = _configure_option_store(app)
    app.extensions.setdefault(PROBE_EXTENSION, CompatibilityProbe.from_config(app.config))
    _register_request_hooks(app)

    from .blueprints.navigation import navigation_bp

    app.register_blueprint(navigation_bp, url_prefix="/admin")

    configure_logging(app)

    from .management import register_commands

    register_commands(app)
    _run_create_all(app, store)

    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None, config_name: str | None) -> None:
    app.config.from_object(config_map[config_name] if config_name else get_config())
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)

    if app.config.get("TESTING"):
        app.config.setdefault("WTF_CSRF_ENABLED", False)


def _configure_option_store(app: Flask) -> OptionStore:
    options_file = app.config.get("OPTIONS_FILE") or "options.json"
    if not os.path.isabs(options_file):
        options_file = os.path.join(app.instance_path, options_file)
    store = build_option_store(app.config.get("OPTION_STORE", "database"), options_file=options_file)
    app.extensions[OPTION_STORE_EXTENSION] = store
    logger.info("Admin options stored in %s backend", type(store).__name__)
    return store


def get_option_store(app: Flask) -> OptionStore:
    return app.extensions[OPTION_STORE_EXTENSION]


def build_navigation(app: Flask) -> NavigationIntegration:
    """Compose the gate, assets and hooks for one request."""
    gate = FeatureGate(get_option_store(app), app.extensions[PROBE_EXTENSION])
    loader = AssetLoader(app.config.get("ASSET_BASE_URL", "/static/dist"), app.config.get("ASSET_VERSION") or "")
    integration = NavigationIntegration(
        gate,
        loader,
        default_features=app.config.get("ADMIN_FEATURES", ()),
        managed_prefix=app.config.get("NAVIGATION_MANAGED_PREFIX", "/admin/store/"),
    )
    integration.register(HookRegistry())
    return integration


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def _compose_navigation():
        if request.blueprint == "navigation":
            g.navigation = build_navigation(app)


def _run_create_all(app: Flask, store: OptionStore) -> None:
    if not isinstance(store, DatabaseOptionStore):
        return
    with app.app_context():
        db.create_all()
