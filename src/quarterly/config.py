"""Configuration management for Quarterly."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.layout import LayoutConfig
from .core.navigation import NavigationBounds
from .core.period import ViewMode
from .core.validation import ValidationWindow

logger = logging.getLogger(__name__)

QUARTERLY_HOME = Path(os.environ.get("QUARTERLY_HOME", Path.home() / "quarterly"))
CONFIG_FILE = QUARTERLY_HOME / "config" / "quarterly.conf"

_INT_KEYS = {
    "task_height",
    "task_gap",
    "header_height",
    "min_chart_height",
    "bottom_padding",
    "years_past",
    "years_future",
    "chart_width",
}


@dataclass
class Config:
    """Quarterly configuration."""

    min_width_percent: float = 1.0
    task_height: int = 38
    task_gap: int = 4
    header_height: int = 60
    min_chart_height: int = 200
    bottom_padding: int = 40
    years_past: int = 1
    years_future: int = 2
    min_year: int | None = None
    max_year: int | None = None
    default_view: ViewMode = ViewMode.QUARTER
    chart_width: int = 72

    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            min_width_percent=self.min_width_percent,
            task_height=self.task_height,
            task_gap=self.task_gap,
            header_height=self.header_height,
            min_chart_height=self.min_chart_height,
            bottom_padding=self.bottom_padding,
        )

    def validation_window(self) -> ValidationWindow:
        return ValidationWindow(years_past=self.years_past, years_future=self.years_future)

    def bounds(self) -> NavigationBounds | None:
        """Navigation bounds, only when both ends are configured."""
        if self.min_year is None or self.max_year is None:
            return None
        return NavigationBounds(self.min_year, self.max_year)


def _strip_value(value: str) -> str:
    """Unquote a value, or drop an inline comment from an unquoted one."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from quarterly.conf (KEY = value lines)."""
    config = Config()
    config_file = Path(path) if path else CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        try:
            match key:
                case _ if key in _INT_KEYS:
                    setattr(config, key, int(value))
                case "min_width_percent":
                    config.min_width_percent = float(value)
                case "min_year":
                    config.min_year = int(value)
                case "max_year":
                    config.max_year = int(value)
                case "default_view":
                    config.default_view = ViewMode(value.lower())
                case _:
                    logger.debug(f"Ignoring unknown config key {key!r}")
        except ValueError as e:
            logger.warning(f"Invalid value for {key.upper()} in {config_file}: {e}")

    return config
