"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el pipeline depende de abstracciones, y los
  tests pueden sustituir pypdf o Percy por dobles.
"""

from core.interfaces.page_counter import PageCounter
from core.interfaces.snapshot_runner import SnapshotRunner

__all__ = ["PageCounter", "SnapshotRunner"]
