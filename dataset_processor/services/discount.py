from __future__ import annotations

"""Stateful discount generator.

The only piece of mutable state in the processor: one counter advanced by a
fixed step on every call. Invoked sequentially within one run.
"""

__all__ = [
    "DiscountGenerator",
    "DEFAULT_STEP",
]

DEFAULT_STEP = 5.0


class DiscountGenerator:
    """Callable discount counter.

    The Nth call returns ``base + step * N``::

        >>> gen = DiscountGenerator(5)
        >>> gen(), gen(), gen()
        (10.0, 15.0, 20.0)
    """

    def __init__(self, base: float, step: float = DEFAULT_STEP) -> None:
        self.base = float(base)
        self.step = float(step)
        self._current = self.base
        self.calls = 0

    def __call__(self) -> float:
        self._current += self.step
        self.calls += 1
        return self._current

    @property
    def current(self) -> float:
        """Last returned value (``base`` before the first call)."""
        return self._current
