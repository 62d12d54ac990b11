"""Scale-to-fit for the fixed-aspect design canvas."""

from __future__ import annotations

from typing import NamedTuple, Optional

from .primitives import CANVAS_HEIGHT, CANVAS_WIDTH

MIN_SCALE = 0.1
DEFAULT_PADDING = 40


def fit_ratio(
    container_width: float,
    container_height: float,
    padding: float = DEFAULT_PADDING,
    canvas_width: float = CANVAS_WIDTH,
    canvas_height: float = CANVAS_HEIGHT,
) -> float:
    """Unclamped uniform ratio that fits a canvas inside the padded container."""
    available_width = max(0.0, container_width - padding)
    available_height = max(0.0, container_height - padding)
    return min(available_width / canvas_width, available_height / canvas_height)


def compute_scale(
    container_width: float,
    container_height: float,
    padding: float = DEFAULT_PADDING,
    canvas_width: float = CANVAS_WIDTH,
    canvas_height: float = CANVAS_HEIGHT,
    previous: Optional[float] = None,
) -> float:
    """Uniform scale that fits the canvas inside the padded container.

    A container that has not been laid out yet (zero width or height) keeps
    ``previous`` (1.0 when there is none). The result never drops below 0.1.
    """
    if container_width == 0 or container_height == 0:
        return previous if previous is not None else 1.0
    return max(MIN_SCALE, fit_ratio(container_width, container_height, padding, canvas_width, canvas_height))


class FitTransform(NamedTuple):
    scale: float
    offset_x: float
    offset_y: float


def fit_transform(
    container_width: float,
    container_height: float,
    padding: float = DEFAULT_PADDING,
    canvas_width: float = CANVAS_WIDTH,
    canvas_height: float = CANVAS_HEIGHT,
    previous: Optional[float] = None,
) -> FitTransform:
    """Scale plus the offsets that center the scaled canvas in the container."""
    scale = compute_scale(
        container_width, container_height, padding, canvas_width, canvas_height, previous
    )
    return FitTransform(
        scale=scale,
        offset_x=(container_width - canvas_width * scale) / 2,
        offset_y=(container_height - canvas_height * scale) / 2,
    )


class FitToContainer:
    """Tracks the preview scale across container resize notifications."""

    def __init__(
        self,
        padding: float = DEFAULT_PADDING,
        canvas_width: float = CANVAS_WIDTH,
        canvas_height: float = CANVAS_HEIGHT,
    ) -> None:
        self.padding = padding
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.scale = 1.0

    def observe(self, container_width: float, container_height: float) -> float:
        """Recompute the scale for a new container size and return it."""
        self.scale = compute_scale(
            container_width,
            container_height,
            self.padding,
            self.canvas_width,
            self.canvas_height,
            previous=self.scale,
        )
        return self.scale
