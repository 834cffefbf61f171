"""Conversion data models.

Transient records built while converting one class component: the
component's members, the bindings derived from them, and the reports
handed back to callers. All node references are arena indices.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


# ── Members ──────────────────────────────────────────────────────────


class MemberKind(str, Enum):
    """Shape of a class body element."""

    FIELD = "field"
    METHOD = "method"


@dataclass
class Member:
    """A field or method of a class component."""

    kind: MemberKind
    node: int
    name: Optional[str] = None
    """Plain name; ``None`` for computed, private and literal names."""

    is_static: bool = False
    is_computed: bool = False

    value: Optional[int] = None
    """Field initialiser, if any."""

    params: Optional[int] = None
    body: Optional[int] = None
    method_kind: str = "method"
    """``"method"``, ``"get"``, ``"set"`` or ``"constructor"``."""

    is_async: bool = False
    is_generator: bool = False

    @property
    def is_plain(self) -> bool:
        """Non-static and plainly named: the only members conversion touches."""
        return not self.is_static and not self.is_computed and self.name is not None


@dataclass
class ComponentDeclaration:
    """A class-shaped declaration considered for conversion."""

    name: str
    node: int
    members: List[Member] = field(default_factory=list)
    export: Optional[int] = None
    """Enclosing ``export`` statement, when the class is exported."""

    is_default_export: bool = False


# ── Derived bindings ─────────────────────────────────────────────────


@dataclass
class StateBinding:
    """One property of the initial-state literal and its hook pair."""

    field_name: str
    getter: str
    setter: str
    init: int
    is_literal: bool


@dataclass
class HoistedVar:
    """A member moved out of the class into a standalone binding."""

    name: str
    value: Optional[int]
    """Initialiser or function value; ``None`` hoists as ``undefined``."""

    member: Member


@dataclass
class EffectBlock:
    """A once-at-mount effect; exactly one of body/cleanup is set."""

    body: Optional[int] = None
    cleanup: Optional[int] = None
    is_async: bool = False


@dataclass
class ImportRequirement:
    """Hook symbols a converted component needs from the framework module."""

    module: str
    symbols: List[str] = field(default_factory=list)
    local_names: Dict[str, str] = field(default_factory=dict)
    """Resolved ``symbol -> local name`` once reconciled."""


# ── Diagnostics and reports ──────────────────────────────────────────


@dataclass
class Diagnostic:
    """Non-blocking annotation attached to a node.

    Rendered by the printer as a leading block comment; never alters
    control flow.
    """

    anchor: int
    message: str
    line: int = 0
    column: int = 0


@dataclass
class ConversionReport:
    """Outcome of converting (or declining to convert) one component."""

    component: str
    converted: bool
    bindings: List[str] = field(default_factory=list)
    hoisted: List[str] = field(default_factory=list)
    effects: int = 0
    diagnostics: List[Diagnostic] = field(default_factory=list)
    skipped_reason: Optional[str] = None


@dataclass
class TransformResult:
    """Complete transformation output for a single file."""

    file_path: str
    language: str
    source: str
    output: str
    components: List[ConversionReport] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.output != self.source

    @property
    def converted_count(self) -> int:
        return sum(1 for c in self.components if c.converted)
