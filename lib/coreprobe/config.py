"""This module defines the configuration for coreprobe.

The configuration is a small YAML file (``coreprobe.yaml``). Every key is
optional, and a missing file simply means the defaults are used. Config
directories hold a ``plugins`` directory, which is searched for additional
probe plugins."""

import getpass
import os
import sys
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, \
    field_validator

from coreprobe import output
from coreprobe.errors import ConfigError

CONFIG_NAME = 'coreprobe.yaml'

DEFAULT_TIMEOUT = 30

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

try:
    USER_HOME_CONFIG = (Path('~')/'.coreprobe').expanduser()
except RuntimeError:
    # The home directory can't be determined.
    USER_HOME_CONFIG = Path('/tmp')/getpass.getuser()/'.coreprobe'


class CoreProbeConfig(BaseModel):
    """The coreprobe configuration. Every key in a config file maps to a
    field here; anything else is an error.

    :ivar Path cfg_file: The file this config was loaded from, if any. This
        is set by :func:`load`, not read from the file.
    """

    model_config = ConfigDict(extra='forbid')

    platform: Optional[str] = Field(
        None, description="Use this platform key instead of the detected one.")
    timeout: Optional[float] = Field(
        DEFAULT_TIMEOUT, ge=0,
        description="Seconds to allow probe commands. 0 or null disables "
                    "the timeout.")
    config_dirs: Optional[List[Path]] = Field(
        default_factory=list,
        description="Directories to search for plugins. Defaults to the "
                    "directory holding the config file.")
    disable_plugins: List[str] = Field(
        default_factory=list,
        description="Plugins to skip, as 'probe.<name>'.")
    log_level: str = Field('WARNING', description="Terminal log level.")
    log_file: Optional[Path] = Field(None, description="Also log here.")
    cfg_file: Optional[Path] = Field(None, exclude=True)

    @field_validator('timeout', mode='before')
    @classmethod
    def no_bool_timeout(cls, value):
        """YAML booleans would otherwise pass as ints."""
        if isinstance(value, bool):
            raise ValueError("timeout must be a number, not a boolean")
        return value

    @field_validator('log_level')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError("log_level must be one of: {}"
                             .format(', '.join(LOG_LEVELS)))
        return value

    @property
    def timeout_secs(self) -> Union[float, None]:
        """The probe timeout, or None if timeouts are disabled."""

        if not self.timeout:
            return None
        return self.timeout


def load_empty() -> CoreProbeConfig:
    """Return a config with every value set to its default."""

    return CoreProbeConfig()


def load(cfg_file, path: Path = None) -> CoreProbeConfig:
    """Load and validate a config from the given open file.

    :param cfg_file: A file object to read YAML from.
    :param path: Where the file lives. Relative config_dirs are resolved
        against its parent directory.
    :raises ConfigError: On bad YAML, unknown keys, or badly typed values.
    """

    try:
        raw = yaml.safe_load(cfg_file)
    except yaml.YAMLError as err:
        raise ConfigError("Invalid YAML in config file.", prior_error=err)

    if raw is None:
        raw = {}

    if not isinstance(raw, dict):
        raise ConfigError(
            "The config file must contain a mapping, got {}."
            .format(type(raw).__name__))

    if 'cfg_file' in raw:
        raise ConfigError("Unknown config key 'cfg_file'.")

    try:
        cfg = CoreProbeConfig.model_validate(raw)
    except ValidationError as err:
        raise ConfigError("Invalid config values.", prior_error=err)

    base_dir = path.resolve().parent if path is not None else Path.cwd()

    if cfg.config_dirs is None or 'config_dirs' not in raw:
        cfg.config_dirs = [base_dir]
    cfg.config_dirs = _resolve_paths(cfg.config_dirs, base_dir)

    if cfg.log_file is not None:
        cfg.log_file = _resolve_paths([cfg.log_file], base_dir)[0]

    cfg.cfg_file = path

    return cfg


def _resolve_paths(paths, base_dir: Path) -> List[Path]:
    """Make each path absolute, relative to the given base directory."""

    resolved = []
    for path in paths:
        path = Path(path).expanduser()
        if not path.is_absolute():
            path = base_dir/path
        resolved.append(path)

    return resolved


def get_search_dirs() -> List[Path]:
    """Return the directories searched for a config file, in order."""

    search_dirs = [Path('./').resolve(), USER_HOME_CONFIG]

    config_dir = os.environ.get('COREPROBE_CONFIG_DIR')
    if config_dir is not None:
        config_dir = Path(config_dir)
        if config_dir.exists():
            search_dirs.append(config_dir.resolve())
        else:
            output.fprint(
                "Invalid path in env var COREPROBE_CONFIG_DIR: '{}'. Ignoring."
                .format(config_dir),
                color=output.YELLOW,
                file=sys.stderr
            )

    return search_dirs


def find_config(target: Path = None) -> CoreProbeConfig:
    """Search for a coreprobe.yaml configuration file. Use the one pointed
to by the COREPROBE_CONFIG_FILE environment variable. Otherwise, use the
first found in these directories:

- The current directory.
- The ~/.coreprobe directory.
- The directory given by COREPROBE_CONFIG_DIR.

If no file is found, a default configuration is returned.

    :param target: A known path to a config file (used mainly for testing).
    :raises ConfigError: When a found config file is invalid.
"""

    candidates = []
    for path in target, os.environ.get('COREPROBE_CONFIG_FILE'):
        if path is not None:
            candidates.append(Path(path))

    for config_dir in get_search_dirs():
        candidates.append(config_dir/CONFIG_NAME)

    for path in candidates:
        if path.is_file():
            try:
                with path.open() as cfg_file:
                    return load(cfg_file, path)
            except OSError as err:
                raise ConfigError(
                    "Could not read config file at '{}'.".format(path),
                    prior_error=err)
            except ConfigError as err:
                raise ConfigError(
                    "Error in config file at '{}'.".format(path),
                    prior_error=err)

    return load_empty()
