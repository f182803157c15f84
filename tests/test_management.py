from admin_navigation.services.feature_gate import ENABLED_OPTION, SHOW_OPT_OUT_OPTION


def test_status_reports_inactive_by_default(runner):
    result = runner.invoke(args=["navigation", "status"])
    assert result.exit_code == 0
    assert "navigation_enabled: no" in result.output
    assert "compatible: yes" in result.output
    assert "features: analytics" in result.output
    assert "Navigation is inactive" in result.output


def test_enable_then_status(runner):
    result = runner.invoke(args=["navigation", "enable"])
    assert result.exit_code == 0
    assert "Navigation enabled." in result.output

    result = runner.invoke(args=["navigation", "status"])
    assert "features: analytics, navigation" in result.output
    assert "Navigation is active" in result.output


def test_enable_twice_is_reported(runner):
    runner.invoke(args=["navigation", "enable"])
    result = runner.invoke(args=["navigation", "enable"])
    assert "already enabled" in result.output


def test_disable_sets_opt_out_marker(runner, options):
    runner.invoke(args=["navigation", "enable"])
    result = runner.invoke(args=["navigation", "disable"])
    assert result.exit_code == 0
    assert "Navigation disabled." in result.output
    assert options.get(ENABLED_OPTION) == "no"
    assert options.get(SHOW_OPT_OUT_OPTION) == "yes"


def test_init_db(runner):
    result = runner.invoke(args=["navigation", "init-db"])
    assert result.exit_code == 0
    assert "Option table ready." in result.output
