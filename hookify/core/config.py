"""Conversion settings.

Names the pipeline matches on and emits: framework module, component base
class, reserved member names, hook names. Defaults reproduce the React
conventions; ``config/hookify.yaml`` (or an explicit path) can override them.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "hookify.yaml"

# Environment override for the framework module
FRAMEWORK_MODULE_ENV = "HOOKIFY_FRAMEWORK_MODULE"


@dataclass
class ConvertSettings:
    """Names used to recognise class components and build function ones."""

    framework_module: str = "react"
    """Module the hooks are imported from."""

    base_names: List[str] = field(default_factory=lambda: ["Component"])
    """Accepted base class names, bare or as ``<ns>.<name>``."""

    state_field: str = "state"
    render_method: str = "render"
    update_method: str = "setState"
    props_name: str = "props"

    mount_method: str = "componentDidMount"
    unmount_methods: List[str] = field(
        default_factory=lambda: ["componentWillUnmount", "componentDidUnmount"]
    )
    """Unmount method names, in lookup order; the first one present wins."""

    state_hook: str = "useState"
    effect_hook: str = "useEffect"

    warning_prefix: str = "@warning"
    """Prefix of the block comments diagnostics are rendered as."""

    @property
    def lifecycle_methods(self) -> List[str]:
        return [self.mount_method, *self.unmount_methods]


def load_settings(config_path: Optional[str] = None) -> ConvertSettings:
    """Load settings from YAML, falling back to defaults.

    Args:
        config_path: Explicit YAML path. Defaults to ``config/hookify.yaml``.

    Returns:
        ConvertSettings with file values and environment overrides applied
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    settings = ConvertSettings()

    if path.exists():
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
            section = data.get("convert") if isinstance(data, dict) else data
            if section is not None and not isinstance(section, dict):
                logger.error(f"Error loading {path}: expected a 'convert' mapping, using defaults")
            else:
                known = {f.name for f in fields(ConvertSettings)}
                for key, value in (section or {}).items():
                    if key in known:
                        setattr(settings, key, value)
                    else:
                        logger.warning(f"Ignoring unknown setting '{key}' in {path}")
                logger.debug(f"Loaded settings from {path}")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading {path}: {e}")
    elif config_path:
        logger.warning(f"Config file not found at {path}, using defaults")

    module = os.getenv(FRAMEWORK_MODULE_ENV)
    if module:
        settings.framework_module = module

    return settings


_settings: Optional[ConvertSettings] = None


def get_settings() -> ConvertSettings:
    """Process-wide default settings, loaded once."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
