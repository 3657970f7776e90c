"""
Tests for the configuration store.
"""

from dataclasses import replace

import pytest

from sulfide.config import (
    DEFAULT_CONFIG,
    RESERVED_ARG_PREFIXES,
    SulfideConfig,
    config_from_env,
    configure,
    sanitize_chrome_args,
)
from sulfide.errors import ConfigurationError


class TestDefaults:
    """Tests for the default configuration."""

    def test_default_values(self):
        """Test the fixed default set."""
        config = configure()

        assert config == SulfideConfig()
        assert config.no_globals is False
        assert config.headless is True
        assert config.ignore_https_errors is True
        assert config.devtools is False
        assert config.width == 800
        assert config.height == 600
        assert config.chrome_args == ()
        assert config.implicit_wait_ms == 4000
        assert config.poll_interval_ms == 200
        assert config.soft_assertions is False
        assert config.extras == {}

    def test_config_is_immutable(self):
        """Test that a configuration cannot be changed in place."""
        with pytest.raises(Exception):
            DEFAULT_CONFIG.width = 1024


class TestConfigure:
    """Tests for configure()."""

    def test_only_supplied_keys_change(self):
        """Test that overrides replace just the keys provided."""
        config = configure(width=1024, height=768)

        assert config == replace(DEFAULT_CONFIG, width=1024, height=768)

    def test_each_call_starts_from_defaults(self):
        """Test that the last call wins and earlier overrides do not leak."""
        configure(headless=False)
        config = configure(width=1024)

        assert config.headless is True
        assert config.width == 1024

    def test_mapping_and_keywords(self):
        """Test that a mapping and keyword overrides merge, keywords last."""
        config = configure({"width": 1000, "height": 500}, width=1200)

        assert config.width == 1200
        assert config.height == 500

    def test_legacy_names(self):
        """Test camelCase option names used by the JavaScript flavour."""
        config = configure({
            "ignoreHTTPSErrors": False,
            "implicitWaitTime": 1000,
            "pollInterval": 50,
            "jasmine": True,
            "noGlobals": True,
            "chromeArgs": ["--mute-audio"],
        })

        assert config.ignore_https_errors is False
        assert config.implicit_wait_ms == 1000
        assert config.poll_interval_ms == 50
        assert config.soft_assertions is True
        assert config.no_globals is True
        assert config.chrome_args == ("--mute-audio",)

    def test_unknown_keys_are_adopted(self):
        """Test that unknown keys pass through without error."""
        config = configure(slow_mo=250, base_url="https://example.test")

        assert config.extras == {"slow_mo": 250, "base_url": "https://example.test"}
        assert replace(config, extras={}) == DEFAULT_CONFIG

    def test_chrome_args_must_be_a_list(self):
        """Test that a non-list argument list is rejected at configure time."""
        with pytest.raises(ConfigurationError, match="list of strings"):
            configure(chrome_args="--mute-audio")

    def test_reserved_chrome_args_are_removed(self):
        """Test that flags Sulfide sets itself are stripped."""
        config = configure(chrome_args=[
            "--no-sandbox",
            "  --disable-setuid-sandbox",
            "--window-size=10,10",
            "--disable-infobars",
            "--app=https://evil.test",
            "--mute-audio",
            "--lang=de",
        ])

        assert config.chrome_args == ("--mute-audio", "--lang=de")
        for arg in config.chrome_args:
            assert not arg.strip().startswith(RESERVED_ARG_PREFIXES)

    def test_non_string_chrome_args_are_dropped(self):
        """Test that entries which are not strings are discarded."""
        assert sanitize_chrome_args(["--mute-audio", 3, None]) == ("--mute-audio",)

    @pytest.mark.parametrize("options", [
        {"implicit_wait_ms": -1},
        {"poll_interval_ms": 0},
        {"width": "wide"},
    ])
    def test_invalid_numbers(self, options):
        """Test that nonsensical timing and size values are rejected."""
        with pytest.raises(ConfigurationError):
            configure(options)

    def test_fractional_timings(self):
        """Test that timings may be given as floats but sizes may not."""
        config = configure(implicit_wait_ms=1500.0, poll_interval_ms=12.5)

        assert config.implicit_wait_ms == 1500.0
        assert config.poll_interval_ms == 12.5
        with pytest.raises(ConfigurationError):
            configure(width=800.0)
        with pytest.raises(ConfigurationError):
            configure(implicit_wait_ms=True)


class TestLaunchOptions:
    """Tests for the derived Playwright launch options."""

    def test_default_launch_args(self):
        """Test the flags Sulfide always passes."""
        options = configure().launch_options()

        assert options == {
            "headless": True,
            "args": ["--no-sandbox", "--disable-setuid-sandbox", "--window-size=800,600"],
        }

    def test_optional_flags(self):
        """Test user args, infobars, devtools and the app url."""
        config = configure(
            headless=False,
            width=1024,
            height=768,
            disable_infobars=True,
            devtools=True,
            chrome_args=["--mute-audio"],
        )

        args = config.launch_args("https://example.test")

        assert args == [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--window-size=1024,768",
            "--mute-audio",
            "--disable-infobars",
            "--auto-open-devtools-for-tabs",
            "--app=https://example.test",
        ]

    def test_context_options(self):
        """Test the browser context options."""
        options = configure(width=1024, height=768, ignore_https_errors=False).context_options()

        assert options == {
            "ignore_https_errors": False,
            "viewport": {"width": 1024, "height": 768},
        }


class TestConfigFromEnv:
    """Tests for environment overrides."""

    def test_reads_variables(self):
        """Test SULFIDE_* variables."""
        config = config_from_env({
            "SULFIDE_HEADLESS": "false",
            "SULFIDE_IMPLICIT_WAIT_MS": "1500",
            "SULFIDE_POLL_INTERVAL_MS": "25",
        })

        assert config.headless is False
        assert config.implicit_wait_ms == 1500
        assert config.poll_interval_ms == 25

    def test_overrides_beat_environment(self):
        """Test that explicit overrides win over the environment."""
        config = config_from_env({"SULFIDE_HEADLESS": "0"}, headless=True)

        assert config.headless is True

    def test_bad_integer(self):
        """Test that a malformed number is a configuration error."""
        with pytest.raises(ConfigurationError, match="SULFIDE_IMPLICIT_WAIT_MS"):
            config_from_env({"SULFIDE_IMPLICIT_WAIT_MS": "soon"})
