"""Emitter collecting outputs into a list."""

from __future__ import annotations

from typing import Any, List

from aggkit.core.functions import Emitter


class InMemoryEmitter(Emitter):
    def __init__(self) -> None:
        self._output: List[Any] = []

    def emit(self, value: Any) -> None:
        self._output.append(value)

    def get_output(self) -> List[Any]:
        return self._output
