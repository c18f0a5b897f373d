"""Operation counting for empirical analysis of :class:`~kheap.heap.KHeap`."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List

from .exceptions import InvalidArgumentError

_OPS = ("insert", "extract", "update", "delete")


@dataclass
class OperationCounter:
    """Heap observer that tallies calls and sift steps per triggering operation.

    Sift counts include one step per slot examined, so a sift that stops
    immediately still counts once. An insertion performed by ``update`` on
    an absent vertex is counted both as an update call and as an insert.

    Attributes:
        k: Heap arity, used for the ``log_k`` bound.
        calls: Number of public ``insert``/``extract``/``update`` calls.
        sift_up: Sift-up steps broken down by triggering operation.
        sift_down: Sift-down steps broken down by triggering operation.
        max_heap_size: Largest size observed after an insertion.
    """

    k: int = 2
    calls: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(_OPS, 0))
    sift_up: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(_OPS, 0))
    sift_down: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(_OPS, 0))
    max_heap_size: int = 0

    def __post_init__(self) -> None:
        if self.k < 2:
            raise InvalidArgumentError(f"k must be at least 2 (got {self.k})")

    # ---- observer callbacks -------------------------------------------

    def on_insert(self) -> None:
        self.calls["insert"] += 1

    def on_extract(self) -> None:
        self.calls["extract"] += 1

    def on_update(self) -> None:
        self.calls["update"] += 1

    def on_sift_up(self, op: str) -> None:
        self.sift_up[op] = self.sift_up.get(op, 0) + 1

    def on_sift_down(self, op: str) -> None:
        self.sift_down[op] = self.sift_down.get(op, 0) + 1

    def on_size(self, size: int) -> None:
        if size > self.max_heap_size:
            self.max_heap_size = size

    # ---- derived metrics ----------------------------------------------

    @property
    def sift_up_total(self) -> int:
        return sum(self.sift_up.values())

    @property
    def sift_down_total(self) -> int:
        return sum(self.sift_down.values())

    def log_k_max(self) -> float:
        """Return ``log_k(max_heap_size)``, or ``0.0`` for an unused heap."""
        if self.max_heap_size <= 0:
            return 0.0
        return math.log(self.max_heap_size) / math.log(self.k)

    def ratios(self) -> Dict[str, float]:
        """Observed sift steps per call relative to ``log_k(max_heap_size)``.

        Returns:
            Mapping with ``r_insert``, ``r_extract`` and ``r_update``. Empty
            when the bound is not positive (heap never held two vertices).
        """
        bound = self.log_k_max()
        if bound <= 0:
            return {}

        def ratio(steps: int, calls: int) -> float:
            return steps / (calls * bound) if calls else 0.0

        return {
            "r_insert": ratio(self.sift_up["insert"], self.calls["insert"]),
            "r_extract": ratio(
                self.sift_up["extract"] + self.sift_down["extract"],
                self.calls["extract"],
            ),
            "r_update": ratio(
                self.sift_up["update"] + self.sift_down["update"],
                self.calls["update"],
            ),
        }

    def as_dict(self) -> Dict[str, object]:
        """Flatten all counters into a JSON-friendly mapping."""
        out: Dict[str, object] = {
            "k": self.k,
            "max_heap_size": self.max_heap_size,
            "sift_up_total": self.sift_up_total,
            "sift_down_total": self.sift_down_total,
        }
        for op in _OPS:
            out[f"{op}_calls"] = self.calls[op]
            out[f"{op}_sift_up"] = self.sift_up.get(op, 0)
            out[f"{op}_sift_down"] = self.sift_down.get(op, 0)
        out.update(self.ratios())
        return out

    def report(self) -> List[str]:
        """Return the human-readable report printed by ``kheap --counters``."""
        lines = [
            f"Insert calls: {self.calls['insert']}",
            f"ExtractMin calls: {self.calls['extract']}",
            f"Update calls: {self.calls['update']}",
            f"Sift up steps: {self.sift_up_total}",
            f"Sift down steps: {self.sift_down_total}",
            f"Insert sift up: {self.sift_up['insert']}",
            f"ExtractMin sift up: {self.sift_up['extract']}",
            f"ExtractMin sift down: {self.sift_down['extract']}",
            f"Update sift up: {self.sift_up['update']}",
            f"Update sift down: {self.sift_down['update']}",
        ]
        ratios = self.ratios()
        if ratios:
            lines.append(f"Max heap size: {self.max_heap_size}")
            lines.append(f"log_{self.k}({self.max_heap_size}): {self.log_k_max():.6g}")
            lines.extend(f"{name}: {value:.6g}" for name, value in ratios.items())
        return lines


__all__ = ["OperationCounter"]
