# role_assignment/crosscutting/timing.py
"""
===============================================================================
MÓDULO: Timing utilities (Timer)
===============================================================================

Objetivo
--------
Medir la duración de cada intento de asignación (chequeo de supervisor +
dos escrituras) y de la creación del work assignment.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componentes:
  - Timer

Responsabilidades:
  - Medir elapsed time con un reloj monotónico inyectable
  - Exponer resultados en segundos y ms para logs/métricas
===============================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class Timer:
    """
    Mide elapsed time con `clock` (por defecto `time.perf_counter`).

    Soporta uso manual (start/stop) y como context manager.
    """

    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)
    _start_time: Optional[float] = field(default=None, repr=False)
    _end_time: Optional[float] = field(default=None, repr=False)

    def start(self) -> "Timer":
        self._start_time = self.clock()
        self._end_time = None
        return self

    def stop(self) -> "Timer":
        if self._start_time is None:
            raise RuntimeError("Timer no iniciado")
        self._end_time = self.clock()
        return self

    @property
    def elapsed_seconds(self) -> float:
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else self.clock()
        return end - self._start_time

    @property
    def elapsed_ms(self) -> float:
        return round(self.elapsed_seconds * 1000, 2)

    def __enter__(self) -> "Timer":
        return self.start()

    def __exit__(self, *args) -> None:
        self.stop()
