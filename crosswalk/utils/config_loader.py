import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from crosswalk.utils.logger import LoggerManager

CONFIG_ENV_VAR = "CROSSWALK_CONFIG"

logger = LoggerManager.get_logger("crosswalk.config")


class ConfigLoader:
    """
    A crosswalk settings file in YAML.

    Top-level keys are sections (`logging`, `convert`); values inside them
    are reachable with dotted keys such as "convert.fail_on_errors". An
    empty file is an empty configuration.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self.data: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        context = {"path": str(self.path)}
        if not self.path.is_file():
            logger.error("config.missing", extra={"extra_data": context})
            raise FileNotFoundError(f"Config file not found: {self.path}")

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error("config.load.fail", extra={"extra_data": {**context, "error": str(e)}}, exc_info=True)
            raise

        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.error("config.invalid_type", extra={"extra_data": context})
            raise ValueError(f"Invalid config (expected mapping) at {self.path}")
        logger.info("config.loaded", extra={"extra_data": {**context, "sections": sorted(data)}})
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted key, or default when any step is missing."""
        node: Any = self.data
        for step in key.split("."):
            if not isinstance(node, dict) or step not in node:
                return default
            node = node[step]
        return node

    def section(self, name: str) -> Dict[str, Any]:
        """A top-level section as a dict; absent or null sections are empty."""
        value = self.data.get(name)
        if value is None:
            return {}
        if not isinstance(value, dict):
            logger.error("config.invalid_section", extra={"extra_data": {"path": str(self.path), "section": name}})
            raise ValueError(f"Config section '{name}' must be a mapping in {self.path}")
        return value

    def as_dict(self) -> Dict[str, Any]:
        return self.data


class LoggingSettings(BaseModel):
    """Logging section of the crosswalk configuration."""

    level: str = Field("INFO", description="Log level threshold")
    json_files: bool = Field(False, description="Write file logs as JSON lines")
    log_dir: Optional[str] = Field(None, description="Directory for per-module log files")


class ConvertSettings(BaseModel):
    """Conversion section of the crosswalk configuration."""

    fail_on_errors: bool = Field(
        False,
        description="Exit non-zero when any record produced conversion errors",
    )
    include_errors: bool = Field(
        True,
        description="Attach error messages to each converted output line",
    )


class CrosswalkSettings(BaseModel):
    """Top-level settings for the CLI."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    convert: ConvertSettings = Field(default_factory=ConvertSettings)


def load_settings(path: Optional[str | Path] = None) -> CrosswalkSettings:
    """Build settings from a YAML file, or defaults when there is none.

    Args:
        path: Optional path to a YAML config file; falls back to the
            CROSSWALK_CONFIG environment variable

    Returns:
        CrosswalkSettings populated from the `logging` and `convert` sections

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file or a section is not a mapping, or a setting has
            the wrong type (pydantic's ValidationError is a ValueError)
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return CrosswalkSettings()
    loader = ConfigLoader(path)
    return CrosswalkSettings(
        logging=LoggingSettings(**loader.section("logging")),
        convert=ConvertSettings(**loader.section("convert")),
    )
