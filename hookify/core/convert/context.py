"""ConversionContext — shared state for one file's conversion.

Built once per file and passed to every conversion step. This avoids
passing the arena, settings and diagnostics through every signature.
"""

from typing import List

from ..config import ConvertSettings
from ..syntax import SyntaxArena
from .diagnostics import DiagnosticCollector
from .models import ConversionReport


class ConversionContext:
    """Shared structures for converting the components of one file.

    Attributes:
        arena: The file's syntax arena, exclusively owned for the run.
        settings: Names to match and emit.
        diagnostics: Side list of diagnostics raised so far.
        file_path: Path used in log messages.
        reports: One report per eligible component, in file order.
    """

    __slots__ = ("arena", "settings", "diagnostics", "file_path", "reports")

    def __init__(
        self,
        arena: SyntaxArena,
        settings: ConvertSettings,
        diagnostics: DiagnosticCollector,
        file_path: str = "",
    ):
        self.arena = arena
        self.settings = settings
        self.diagnostics = diagnostics
        self.file_path = file_path
        self.reports: List[ConversionReport] = []

    @classmethod
    def for_arena(cls, arena: SyntaxArena, settings: ConvertSettings, file_path: str = "") -> "ConversionContext":
        diagnostics = DiagnosticCollector(arena, settings.warning_prefix, file_path)
        return cls(arena=arena, settings=settings, diagnostics=diagnostics, file_path=file_path)
