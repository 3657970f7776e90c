from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from sulfide.errors import ConfigurationError

logger = logging.getLogger("sulfide")

# Flags Sulfide sets itself when launching Chromium.
RESERVED_ARG_PREFIXES: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--window-size",
    "--disable-infobars",
    "--app",
)

# Option names used by the JavaScript flavour of the library.
LEGACY_ALIASES: dict[str, str] = {
    "noGlobals": "no_globals",
    "ignoreHTTPSErrors": "ignore_https_errors",
    "disableInfobars": "disable_infobars",
    "chromeArgs": "chrome_args",
    "implicitWaitTime": "implicit_wait_ms",
    "pollInterval": "poll_interval_ms",
    "jasmine": "soft_assertions",
}


@dataclass(frozen=True)
class SulfideConfig:
    """Effective Sulfide configuration. Build it with ``configure``."""
    no_globals: bool = False
    headless: bool = True
    ignore_https_errors: bool = True
    devtools: bool = False
    width: int = 800
    height: int = 600
    disable_infobars: bool = False
    chrome_args: tuple[str, ...] = ()
    # Element lookups keep polling the page for this long
    implicit_wait_ms: float = 4_000
    poll_interval_ms: float = 200
    # Record lookup/assertion failures instead of raising them
    soft_assertions: bool = False
    extras: dict[str, Any] = field(default_factory=dict, hash=False)

    def launch_args(self, launch_url: str = "") -> list[str]:
        args = [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            f"--window-size={self.width},{self.height}",
            *self.chrome_args,
        ]
        if self.disable_infobars:
            args.append("--disable-infobars")
        if self.devtools:
            args.append("--auto-open-devtools-for-tabs")
        if launch_url:
            args.append(f"--app={launch_url}")
        return args

    def launch_options(self, launch_url: str = "") -> dict[str, Any]:
        """Keyword arguments for ``playwright.chromium.launch``."""
        return {
            "headless": self.headless,
            "args": self.launch_args(launch_url),
        }

    def context_options(self) -> dict[str, Any]:
        """Keyword arguments for ``browser.new_context``."""
        return {
            "ignore_https_errors": self.ignore_https_errors,
            "viewport": {"width": self.width, "height": self.height},
        }


DEFAULT_CONFIG = SulfideConfig()

_FIELD_NAMES = frozenset(f.name for f in fields(SulfideConfig) if f.name != "extras")


def sanitize_chrome_args(args: Any) -> tuple[str, ...]:
    if not isinstance(args, (list, tuple)):
        raise ConfigurationError("chrome_args should be a list of strings")

    kept: list[str] = []
    for arg in args:
        if not isinstance(arg, str):
            logger.warning(f"[Sulfide] Ignoring non-string chrome arg: {arg!r}")
            continue
        if arg.strip().startswith(RESERVED_ARG_PREFIXES):
            logger.warning(f"[Sulfide] Ignoring reserved chrome arg: {arg}")
            continue
        kept.append(arg)
    return tuple(kept)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate(values: dict[str, Any]) -> None:
    for name in ("width", "height"):
        if name in values and (not isinstance(values[name], int) or values[name] < 0):
            raise ConfigurationError(f"{name} should be a non-negative integer, got {values[name]!r}")
    if "implicit_wait_ms" in values:
        wait = values["implicit_wait_ms"]
        if not _is_number(wait) or wait < 0:
            raise ConfigurationError(f"implicit_wait_ms should be a non-negative number, got {wait!r}")
    if "poll_interval_ms" in values:
        interval = values["poll_interval_ms"]
        if not _is_number(interval) or interval <= 0:
            raise ConfigurationError(f"poll_interval_ms should be a positive number, got {interval!r}")


def configure(options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> SulfideConfig:
    """
    Build the effective configuration.

    Every call starts again from the defaults, so the last call wins.
    Known keys (snake_case, or their legacy camelCase names) override the
    defaults; unknown keys are kept in ``extras``.

    Args:
        options: Mapping of option names to values
        **overrides: Same as ``options``, applied after it

    Returns:
        The new SulfideConfig
    """
    supplied = dict(options or {})
    supplied.update(overrides)

    known: dict[str, Any] = {}
    extras: dict[str, Any] = {}
    for key, value in supplied.items():
        name = LEGACY_ALIASES.get(key, key)
        if name in _FIELD_NAMES:
            known[name] = value
        else:
            extras[key] = value

    if "chrome_args" in known:
        known["chrome_args"] = sanitize_chrome_args(known["chrome_args"])
    _validate(known)

    return replace(DEFAULT_CONFIG, extras=extras, **known)


def _env_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def config_from_env(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> SulfideConfig:
    """Configuration seeded from SULFIDE_* environment variables."""
    env = os.environ if environ is None else environ
    options: dict[str, Any] = {}

    if env.get("SULFIDE_HEADLESS"):
        options["headless"] = _env_flag(env["SULFIDE_HEADLESS"])
    for var, name in (
        ("SULFIDE_IMPLICIT_WAIT_MS", "implicit_wait_ms"),
        ("SULFIDE_POLL_INTERVAL_MS", "poll_interval_ms"),
    ):
        raw = env.get(var)
        if not raw:
            continue
        try:
            options[name] = int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"{var} should be an integer, got {raw!r}") from exc

    options.update(overrides)
    return configure(options)
