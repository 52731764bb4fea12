"""Deal with configuration file."""
import logging
import os
from io import StringIO
from pathlib import Path
from typing import Any, MutableMapping, Optional, Union

import toml

# Order matters here. Local should take precedence over global.
CONFIG_PATHS = [
    Path("~/.config/pyec2lib.toml").expanduser(),
    Path("/etc/pyec2lib.toml"),
]

DEFAULT_POLL_INTERVAL_MS = 5000

ConfigFile = Union[Path, StringIO]
log = logging.getLogger(__name__)


class Config(dict):
    """Override dict to allow raising a more meaningful KeyError."""

    def __getitem__(self, key):
        """Provide more meaningful KeyError on access."""
        try:
            return super().__getitem__(key)
        except KeyError:
            raise KeyError(
                "{} must be defined in pyec2lib.toml to make this "
                "call".format(key)
            ) from None


def parse_config(
    config_file: Optional[ConfigFile] = None,
    missing_ok: bool = False,
) -> MutableMapping[str, Any]:
    """Find the relevant TOML, load, and return it.

    Args:
        config_file: explicit configuration file, checked first
        missing_ok: return an empty configuration instead of raising when
            no configuration file exists

    Returns:
        The parsed configuration
    """
    possible_configs = []
    if config_file:
        possible_configs.append(config_file)
    if os.environ.get("PYEC2LIB_CONFIG"):
        possible_configs.append(Path(os.environ["PYEC2LIB_CONFIG"]))
    possible_configs.extend(CONFIG_PATHS)
    for path in possible_configs:
        try:
            config = toml.load(path, _dict=Config)
            log.debug("Loaded configuration from %s", path)
            return config
        except FileNotFoundError:
            continue
        except toml.TomlDecodeError as e:
            raise ValueError(
                "Could not parse configuration file pointed to by "
                "{}".format(path)
            ) from e
    if missing_ok:
        log.debug("No configuration file found, using defaults")
        return Config()
    raise ValueError(
        "No configuration file found! Copy pyec2lib.toml.template to "
        "~/.config/pyec2lib.toml or /etc/pyec2lib.toml"
    )


def ec2_section(
    config_file: Optional[ConfigFile] = None, missing_ok: bool = False
) -> MutableMapping[str, Any]:
    """Return the `[ec2]` table of the configuration."""
    config = parse_config(config_file, missing_ok=missing_ok)
    return Config(config.get("ec2", {}))
