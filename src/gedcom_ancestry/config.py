import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom_ancestry.yml"
CONFIG_ENV_VAR = "GEDCOM_ANCESTRY_CONFIG"


class GAConfig:
    def __init__(self, data):
        self.paths = data.get("paths") or {}
        self.logging = data.get("logging") or {}
        self.report = data.get("report") or {}
        self.debug = bool(data.get("debug", False))


def load_config(path=None) -> 'GAConfig':
    """
    Load the YAML configuration.

    An explicit path (argument or $GEDCOM_ANCESTRY_CONFIG) must exist; the
    bundled default may be absent, in which case every setting takes its
    default value.
    """
    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    config_path = Path(explicit) if explicit else CONFIG_PATH

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return GAConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GAConfig(data)


_config_cache = None


def get_config() -> 'GAConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
