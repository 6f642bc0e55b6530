"""Runtime settings for swaptop, overridable from the environment."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from textual.logging import TextualHandler

from swaptop.errors import ConfigError
from swaptop.history import DEFAULT_CAPACITY
from swaptop.models import Unit
from swaptop.scheduler import DEFAULT_INTERVAL_MS, clamp_interval
from swaptop.themes import ThemeType

ENV_PREFIX = "SWAPTOP_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SwaptopConfig:
    """Startup settings. Defaults apply wherever the environment is silent."""

    refresh_interval_ms: int = DEFAULT_INTERVAL_MS
    history_capacity: int = DEFAULT_CAPACITY
    unit: Unit = Unit.KB
    aggregated: bool = False
    theme: ThemeType = ThemeType.DRACULA
    poll_timeout: float = 0.1
    log_level: int = logging.WARNING
    log_file: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SwaptopConfig":
        """
        Build a config from ``SWAPTOP_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigError: A variable is set to a value that cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        raw = env.get(ENV_PREFIX + "REFRESH_MS")
        if raw is not None:
            values["refresh_interval_ms"] = clamp_interval(_parse_int("REFRESH_MS", raw))

        raw = env.get(ENV_PREFIX + "HISTORY")
        if raw is not None:
            capacity = _parse_int("HISTORY", raw)
            if capacity < 1:
                raise ConfigError(f"{ENV_PREFIX}HISTORY must be at least 1, got {capacity}")
            values["history_capacity"] = capacity

        raw = env.get(ENV_PREFIX + "UNIT")
        if raw is not None:
            try:
                values["unit"] = Unit(raw.strip().upper())
            except ValueError:
                raise ConfigError(f"{ENV_PREFIX}UNIT must be KB, MB or GB, got {raw!r}") from None

        raw = env.get(ENV_PREFIX + "AGGREGATE")
        if raw is not None:
            flag = raw.strip().lower()
            if flag not in _TRUE | _FALSE:
                raise ConfigError(f"{ENV_PREFIX}AGGREGATE must be a boolean, got {raw!r}")
            values["aggregated"] = flag in _TRUE

        raw = env.get(ENV_PREFIX + "THEME")
        if raw is not None:
            try:
                values["theme"] = ThemeType(raw.strip().lower())
            except ValueError:
                names = ", ".join(t.value for t in ThemeType)
                raise ConfigError(f"{ENV_PREFIX}THEME must be one of {names}, got {raw!r}") from None

        raw = env.get(ENV_PREFIX + "LOG_LEVEL")
        if raw is not None:
            level = logging.getLevelName(raw.strip().upper())
            if not isinstance(level, int):
                raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {raw!r}")
            values["log_level"] = level

        raw = env.get(ENV_PREFIX + "LOG_FILE")
        if raw:
            values["log_file"] = Path(raw).expanduser()

        return cls(**values)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def setup_logging(config: SwaptopConfig) -> None:
    """
    Route swaptop's log records away from the terminal the UI draws on.

    Records go to the Textual devtools console and, when ``log_file`` is
    set, to that file. Calling it again only updates the level.
    """
    logger = logging.getLogger("swaptop")
    logger.setLevel(config.log_level)
    if any(isinstance(handler, TextualHandler) for handler in logger.handlers):
        return

    handlers: list[logging.Handler] = [TextualHandler()]
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        logger.addHandler(handler)
