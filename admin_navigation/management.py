"""
Management commands for the navigation toggle
"""
import click
from flask import current_app
from flask.cli import AppGroup, with_appcontext

from . import build_navigation, get_option_store
from .extensions import db
from .navigation import UPDATE_TOGGLE_HOOK
from .services.feature_gate import ENABLED_OPTION, NAVIGATION_FEATURE, NO, SHOW_OPT_OUT_OPTION, YES

navigation_cli = AppGroup("navigation", help="Inspect and toggle the admin navigation feature.")


def _set_toggle(value):
    store = get_option_store(current_app)
    old_value = store.get(ENABLED_OPTION, NO)
    store.set(ENABLED_OPTION, value)
    build_navigation(current_app).hooks.do_action(UPDATE_TOGGLE_HOOK, old_value, value, None)
    return old_value


@navigation_cli.command("status")
@with_appcontext
def status_command():
    """Show the toggle, compatibility and resulting feature list"""
    navigation = build_navigation(current_app)
    store = get_option_store(current_app)
    features = navigation.enabled_features()

    print(f"{ENABLED_OPTION}: {store.get(ENABLED_OPTION, NO)}")
    print(f"{SHOW_OPT_OUT_OPTION}: {store.get(SHOW_OPT_OUT_OPTION, NO)}")
    print(f"compatible: {'yes' if navigation.gate.is_compatible() else 'no'}")
    print(f"features: {', '.join(sorted(features)) or '(none)'}")
    if NAVIGATION_FEATURE in features:
        print("✅ Navigation is active")
    else:
        print("ℹ️  Navigation is inactive")


@navigation_cli.command("enable")
@with_appcontext
def enable_command():
    """Turn the navigation toggle on"""
    old_value = _set_toggle(YES)
    if old_value == YES:
        print("ℹ️  Navigation was already enabled.")
    else:
        print("✅ Navigation enabled.")


@navigation_cli.command("disable")
@with_appcontext
def disable_command():
    """Turn the navigation toggle off (shows the opt-out survey once)"""
    old_value = _set_toggle(NO)
    if old_value == NO:
        print("ℹ️  Navigation was already disabled.")
    else:
        print("✅ Navigation disabled.")


@navigation_cli.command("init-db")
@with_appcontext
def init_db_command():
    """Create the option table"""
    try:
        db.create_all()
        print("✅ Option table ready.")
    except Exception as e:
        print(f"❌ Error creating tables: {str(e)}")
        raise click.Abort() from e


def register_commands(app):
    """Register CLI commands"""
    app.cli.add_command(navigation_cli)
