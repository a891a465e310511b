from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

# Indentation unit used for every nesting level. Read once at the start of
# each encode; must not be changed while an encode is running.
INDENT = "    "


@dataclass(frozen=True)
class IndentContext:
    """Current indentation, passed by value through every render call."""

    unit: str
    indent: str = ""

    @classmethod
    def root(cls, unit: Optional[str] = None) -> IndentContext:
        """Zero-depth context using `unit`, or the module-level INDENT."""
        return cls(unit=INDENT if unit is None else unit)

    def deepen(self) -> IndentContext:
        return replace(self, indent=self.indent + self.unit)

    def shallow(self) -> IndentContext:
        if self.unit and self.indent.endswith(self.unit):
            return replace(self, indent=self.indent[: -len(self.unit)])
        return self

    @property
    def depth(self) -> int:
        if not self.unit:
            return 0
        return len(self.indent) // len(self.unit)
