from admin_navigation.hooks import HookRegistry


def test_filters_run_by_priority_then_registration_order():
    hooks = HookRegistry()
    hooks.add_filter("admin_features", lambda features: features + ["late"], priority=20)
    hooks.add_filter("admin_features", lambda features: features + ["first"], priority=0)
    hooks.add_filter("admin_features", lambda features: features + ["second"])
    hooks.add_filter("admin_features", lambda features: features + ["third"])

    assert hooks.apply_filters("admin_features", []) == ["first", "second", "third", "late"]


def test_unregistered_filter_returns_value():
    assert HookRegistry().apply_filters("missing", {"a"}) == {"a"}


def test_filters_receive_extra_arguments():
    hooks = HookRegistry()
    hooks.add_filter("label", lambda value, suffix: f"{value}{suffix}")
    assert hooks.apply_filters("label", "style", "-rtl") == "style-rtl"


def test_actions_collect_non_none_results():
    hooks = HookRegistry()
    seen = []
    hooks.add_action("saved", lambda old, new: seen.append((old, new)))
    hooks.add_action("saved", lambda old, new: f"{old}->{new}")

    assert hooks.do_action("saved", "no", "yes") == ["no->yes"]
    assert seen == [("no", "yes")]
    assert hooks.has_action("saved")
    assert not hooks.has_filter("saved")


def test_unregistered_action_returns_empty_list():
    assert HookRegistry().do_action("nothing") == []


def test_callbacks_are_listed_per_table():
    hooks = HookRegistry()

    def preload(options):
        return options

    def enqueue(queue, path):
        return None

    hooks.add_filter("admin_preload_options", preload)
    hooks.add_action("admin_enqueue_scripts", enqueue)

    assert hooks.filter_callbacks("admin_preload_options") == [preload]
    assert hooks.action_callbacks("admin_preload_options") == []
    assert hooks.action_callbacks("admin_enqueue_scripts") == [enqueue]
    assert hooks.filter_callbacks("admin_enqueue_scripts") == []
