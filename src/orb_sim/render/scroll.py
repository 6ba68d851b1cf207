from __future__ import annotations

from dataclasses import dataclass


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class ScrollState:
    offset: float
    target: float


class PageScroll:
    """Emulated page scrolling that decides when the game takes over.

    The page is ``page_length_factor`` window heights tall. Scrolling past
    ``threshold_ratio`` of the window height counts as entering game mode.
    """

    def __init__(
        self,
        size: tuple[int, int],
        *,
        page_length_factor: float = 3.0,
        threshold_ratio: float = 0.3,
    ) -> None:
        self._size = size
        self._page_length_factor = page_length_factor
        self._threshold_ratio = threshold_ratio
        self._state = ScrollState(offset=0.0, target=0.0)

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size
        self._state.target = _clamp(self._state.target, 0.0, self.max_offset)
        self._state.offset = _clamp(self._state.offset, 0.0, self.max_offset)

    @property
    def max_offset(self) -> float:
        return max(0.0, self._size[1] * (self._page_length_factor - 1.0))

    @property
    def offset(self) -> float:
        return self._state.offset

    @property
    def target(self) -> float:
        return self._state.target

    @property
    def threshold(self) -> float:
        return self._size[1] * self._threshold_ratio

    def scroll_by(self, delta: float) -> None:
        self._state.target = _clamp(self._state.target + delta, 0.0, self.max_offset)

    def scroll_to(self, offset: float) -> None:
        self._state.target = _clamp(offset, 0.0, self.max_offset)

    def update(self, smoothing: float = 0.2) -> None:
        state = self._state
        state.offset += (state.target - state.offset) * smoothing
        if abs(state.target - state.offset) < 0.5:
            state.offset = state.target

    def past_threshold(self) -> bool:
        return self._state.offset > self.threshold
