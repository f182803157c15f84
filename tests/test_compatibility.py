import pytest

from admin_navigation.services.compatibility import (
    CompatibilityProbe,
    is_host_compatible,
    strip_source_suffix,
    version_at_least,
)


@pytest.mark.parametrize(
    "host_version,companion_version,expected",
    [
        ("5.6.0-src", None, True),
        ("5.5.9", "8.9.0", False),
        ("5.6", None, True),
        ("5.5", "9.0.0", True),
        ("5.5", "10.0.0", True),
        ("6.1.1", None, True),
        ("5.5.3-src", None, False),
        (None, None, False),
        ("not-a-version", "also-bad", False),
        ("5.6", "garbage", True),
    ],
)
def test_is_host_compatible(host_version, companion_version, expected):
    assert is_host_compatible(host_version, companion_version) is expected


def test_version_ordering_is_numeric():
    assert version_at_least("10.0.0", "9.1.0")
    assert version_at_least("9.1.0", "9.0.0")
    assert not version_at_least("9.0.0", "9.1.0")


def test_strip_source_suffix():
    assert strip_source_suffix("5.6.1-src") == "5.6.1"
    assert strip_source_suffix("5.6.1") == "5.6.1"


class TestCompatibilityProbe:
    def test_from_config_ignores_inactive_companion(self):
        probe = CompatibilityProbe.from_config(
            {"HOST_VERSION": "5.4", "COMPANION_PLUGIN_ACTIVE": False, "COMPANION_PLUGIN_VERSION": "9.2.0"}
        )
        assert probe.is_host_compatible() is False

    def test_from_config_uses_active_companion(self):
        probe = CompatibilityProbe.from_config(
            {"HOST_VERSION": "5.4", "COMPANION_PLUGIN_ACTIVE": True, "COMPANION_PLUGIN_VERSION": "9.2.0"}
        )
        assert probe.is_host_compatible() is True

    def test_host_read_failure_fails_closed(self):
        def broken():
            raise OSError("version.php unreadable")

        assert CompatibilityProbe(broken).is_host_compatible() is False

    def test_companion_read_failure_falls_back_to_host(self):
        def broken():
            raise KeyError("Version")

        probe = CompatibilityProbe(lambda: "5.7", broken)
        assert probe.is_host_compatible() is True

    def test_companion_satisfies_before_host_is_read(self):
        calls = []

        def host():
            calls.append("host")
            return "5.0"

        probe = CompatibilityProbe(host, lambda: "9.0.0")
        assert probe.is_host_compatible() is True
        assert calls == []
