# realm_config/settings.py
"""
Runtime settings for the split/merge tool.

Directory targeting:
    The section directory is resolved with the following precedence:
    1. Explicit `config_dir` argument (CLI --config-dir)
    2. Environment variable REALM_CONFIG_DIR
    3. Module constant CONFIG_DIR

File names:
    <config_dir>/log<ext>                               log section
    <config_dir>/endpoint_<position>_<remote><ext>      one per endpoint
"""

import glob
import os
from dataclasses import dataclass
from typing import Optional

CONFIG_DIR = "realm_configs"
DEFAULT_COMBINED_FILE = "realm.json"
SECTION_EXT = ".yaml"
LOG_SECTION_NAME = "log"
ENDPOINT_PREFIX = "endpoint_"


def resolve_config_dir(config_dir: Optional[str] = None) -> str:
    """Return the section directory (explicit > env REALM_CONFIG_DIR > CONFIG_DIR)."""
    return config_dir or os.getenv("REALM_CONFIG_DIR") or CONFIG_DIR


@dataclass
class RealmSettings:
    """
    Names used by the splitter and merger.

    Construct with `RealmSettings.from_env()` to honor REALM_CONFIG_DIR, or
    pass `config_dir` directly (tests do this to avoid chdir).
    """

    config_dir: str = CONFIG_DIR
    section_ext: str = SECTION_EXT
    log_name: str = LOG_SECTION_NAME
    endpoint_prefix: str = ENDPOINT_PREFIX

    @classmethod
    def from_env(cls, config_dir: Optional[str] = None) -> "RealmSettings":
        return cls(config_dir=resolve_config_dir(config_dir))

    def log_path(self) -> str:
        return os.path.join(self.config_dir, self.log_name + self.section_ext)

    def endpoint_glob(self) -> str:
        # directory part is escaped so names like "cfg[1]" are matched literally
        return os.path.join(glob.escape(self.config_dir), f"{self.endpoint_prefix}*{self.section_ext}")
