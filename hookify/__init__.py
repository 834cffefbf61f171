"""hookify — converts class components into hook-based function components."""

from .core.config import ConvertSettings, load_settings
from .core.convert import TransformResult, transform_file, transform_source
from .core.syntax import SourceParseError

__version__ = "0.1.0"

__all__ = [
    "ConvertSettings",
    "SourceParseError",
    "TransformResult",
    "load_settings",
    "transform_file",
    "transform_source",
]
