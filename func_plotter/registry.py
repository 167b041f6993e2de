from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterator

from func_plotter.expression import CurveFunction, compile_function
from func_plotter.settings import PALETTE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FunctionEntry:
    expression: str
    evaluator: CurveFunction
    color: str
    enabled: bool = True


class FunctionRegistry:
    """Ordered collection of the functions the user has added.

    Every mutating method returns a snapshot of the entries so callers can
    redraw their list without reaching back into the registry.  Colours are
    taken round-robin from :data:`PALETTE` by the registry length at
    insertion time, so after a delete two entries may share a colour.
    """

    def __init__(self, palette: tuple[str, ...] = PALETTE) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = palette
        self._entries: list[FunctionEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FunctionEntry]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> FunctionEntry:
        return self._entries[index]

    @property
    def entries(self) -> tuple[FunctionEntry, ...]:
        return tuple(self._entries)

    def enabled(self) -> tuple[FunctionEntry, ...]:
        return tuple(e for e in self._entries if e.enabled)

    def add(self, text: str) -> tuple[FunctionEntry, ...]:
        """Compile *text* and append it; raises ``InvalidExpressionError``."""
        evaluator = compile_function(text)
        entry = FunctionEntry(
            expression=text.strip(),
            evaluator=evaluator,
            color=self._palette[len(self._entries) % len(self._palette)],
        )
        self._entries.append(entry)
        logger.info("Added %r (%s)", entry.expression, entry.color)
        return self.entries

    def remove(self, index: int) -> tuple[FunctionEntry, ...]:
        entry = self._entries.pop(index)
        logger.info("Removed %r", entry.expression)
        return self.entries

    def toggle(self, index: int, enabled: bool) -> tuple[FunctionEntry, ...]:
        self._entries[index] = dataclasses.replace(self._entries[index], enabled=enabled)
        logger.info("%s %r", "Enabled" if enabled else "Disabled",
                    self._entries[index].expression)
        return self.entries
