import itertools

import pytest

from admin_navigation.services.compatibility import StaticProbe
from admin_navigation.services.feature_gate import (
    ENABLED_OPTION,
    SHOW_OPT_OUT_OPTION,
    FeatureGate,
    RedirectRequested,
    filter_features,
)
from admin_navigation.services.option_store import MemoryOptionStore


class _ExplodingProbe:
    def is_host_compatible(self):
        raise RuntimeError("version file missing")


class TestFilterFeatures:
    @pytest.mark.parametrize("is_enabled", [True, False])
    def test_features_without_navigation_pass_through_when_compatible(self, is_enabled):
        features = {"analytics", "marketing"}
        assert filter_features(features, is_enabled, True) is features

    def test_disabled_option_removes_navigation(self):
        assert filter_features({"navigation", "other"}, False, True) == {"other"}

    def test_enabled_and_compatible_keeps_navigation(self):
        assert filter_features({"navigation"}, True, True) == {"navigation"}

    def test_incompatible_host_removes_navigation_even_when_enabled(self):
        assert filter_features({"navigation"}, True, False) == set()

    def test_input_is_not_mutated(self):
        features = {"navigation", "other"}
        filter_features(features, False, True)
        assert features == {"navigation", "other"}

    def test_lists_are_filtered_into_lists(self):
        assert filter_features(["navigation", "other"], False, True) == ["other"]

    @pytest.mark.parametrize(
        "features,is_enabled,is_compatible",
        [
            (features, a, b)
            for features, (a, b) in itertools.product(
                [set(), {"navigation"}, {"navigation", "other"}, {"other"}],
                itertools.product([True, False], repeat=2),
            )
        ],
    )
    def test_filtering_is_idempotent(self, features, is_enabled, is_compatible):
        once = filter_features(features, is_enabled, is_compatible)
        assert filter_features(once, is_enabled, is_compatible) == once


class TestFeatureGate:
    def test_missing_option_defaults_to_disabled(self, gate):
        assert gate.is_option_enabled() is False
        assert gate.maybe_remove_nav_feature({"navigation", "other"}) == {"other"}

    def test_only_exact_yes_enables(self, memory_options, gate):
        memory_options.set(ENABLED_OPTION, "YES")
        assert gate.is_option_enabled() is False
        memory_options.set(ENABLED_OPTION, "yes")
        assert gate.maybe_remove_nav_feature({"navigation"}) == {"navigation"}

    def test_filtering_does_not_write_options(self, memory_options, gate):
        memory_options.set(ENABLED_OPTION, "no")
        gate.maybe_remove_nav_feature({"navigation"})
        assert memory_options.all() == {ENABLED_OPTION: "no"}

    def test_failing_probe_is_treated_as_incompatible(self, memory_options):
        memory_options.set(ENABLED_OPTION, "yes")
        gate = FeatureGate(memory_options, _ExplodingProbe())
        assert gate.is_compatible() is False
        assert gate.maybe_remove_nav_feature({"navigation"}) == set()

    def test_preload_options_appends_toggle_key(self, gate):
        assert gate.preload_options(["timezone"]) == ["timezone", ENABLED_OPTION]


class TestReloadOnToggle:
    def test_unchanged_value_is_a_no_op(self, memory_options, gate):
        assert gate.reload_page_on_toggle("yes", "yes", "/admin/") is None
        assert memory_options.get(SHOW_OPT_OUT_OPTION) is None

    def test_disabling_sets_opt_out_and_requests_redirect(self, memory_options, gate):
        intent = gate.reload_page_on_toggle("yes", "no", "/admin/settings/navigation")
        assert intent == RedirectRequested(location="/admin/settings/navigation")
        assert memory_options.get(SHOW_OPT_OUT_OPTION) == "yes"

    def test_enabling_redirects_without_opt_out(self, memory_options, gate):
        intent = gate.reload_page_on_toggle("no", "yes", "/admin/")
        assert intent == RedirectRequested(location="/admin/")
        assert memory_options.get(SHOW_OPT_OUT_OPTION) is None

    def test_no_request_uri_still_records_opt_out(self, memory_options, gate):
        assert gate.reload_page_on_toggle("yes", "no") is None
        assert memory_options.get(SHOW_OPT_OUT_OPTION) == "yes"

    def test_equality_is_exact(self, memory_options, gate):
        assert gate.reload_page_on_toggle("yes", "Yes", "/admin/") is not None
        assert memory_options.get(SHOW_OPT_OUT_OPTION) == "yes"


class TestOptOutMarker:
    def test_consumed_once(self):
        options = MemoryOptionStore({SHOW_OPT_OUT_OPTION: "yes"})
        gate = FeatureGate(options, StaticProbe(True))
        assert gate.consume_opt_out() is True
        assert options.get(SHOW_OPT_OUT_OPTION) is None
        assert gate.consume_opt_out() is False

    def test_other_values_are_ignored(self):
        options = MemoryOptionStore({SHOW_OPT_OUT_OPTION: "no"})
        gate = FeatureGate(options, StaticProbe(True))
        assert gate.consume_opt_out() is False
        assert options.get(SHOW_OPT_OUT_OPTION) == "no"
