"""Preference persistence for chatmd."""

import logging
from pathlib import Path
from typing import Optional, Dict, Any
import yaml

from . import heights  # noqa: F401  (declares the codeblock prefs)
from . import prefs

_log = logging.getLogger(__name__)


class PrefsConfig:
    """Load and save registered preferences from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path or "~/.config/chatmd/prefs.yaml").expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()

        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            _log.error("Error reading config %s: %s", self.config_path, e)
            return {}

        if not isinstance(content, dict):
            return {}
        return content

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            "prefs": {pref.key: pref.default for pref in prefs.registered()},
        }

        with open(self.config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    def _section(self) -> Dict[str, Any]:
        section = self.data.get("prefs")
        if not isinstance(section, dict):
            section = {}
            self.data["prefs"] = section
        return section

    def load(self) -> None:
        """Publish every stored value to its preference.

        Unknown keys and invalid values are skipped with a warning.
        """
        for key, value in self._section().items():
            pref = prefs.find(key)
            if pref is None:
                _log.warning("Ignoring unknown preference %r in %s", key, self.config_path)
                continue
            try:
                pref.publish(value)
            except prefs.PrefError as e:
                _log.warning("Ignoring stored preference: %s", e)

    def get(self, key: str) -> int:
        """Get the live value of a preference."""
        return prefs.by_key(key).value()

    def set(self, key: str, value: int) -> None:
        """Validate, publish and record a preference value."""
        prefs.by_key(key).publish(value)
        self._section()[key] = value

    def save(self) -> None:
        """Save configuration to file."""
        section = self._section()
        for pref in prefs.registered():
            section[pref.key] = pref.value()

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.dump(self.data, f, default_flow_style=False)
