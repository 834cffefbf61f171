"""Class-to-hooks conversion pipeline.

Public API:
    transform_source(source, file_path, language, settings) → TransformResult
    transform_file(path, settings, write) → TransformResult
    transform_tree(arena, settings, file_path) → ConversionContext
"""

from .context import ConversionContext
from .diagnostics import DiagnosticCollector
from .models import (
    ComponentDeclaration,
    ConversionReport,
    Diagnostic,
    EffectBlock,
    HoistedVar,
    ImportRequirement,
    Member,
    MemberKind,
    StateBinding,
    TransformResult,
)
from .pipeline import ComponentConverter, transform_file, transform_source, transform_tree

__all__ = [
    "transform_file",
    "transform_source",
    "transform_tree",
    "ComponentConverter",
    "ComponentDeclaration",
    "ConversionContext",
    "ConversionReport",
    "Diagnostic",
    "DiagnosticCollector",
    "EffectBlock",
    "HoistedVar",
    "ImportRequirement",
    "Member",
    "MemberKind",
    "StateBinding",
    "TransformResult",
]
