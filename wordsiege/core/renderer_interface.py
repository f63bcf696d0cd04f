"""
Renderer contract for Word Siege stages.

A stage lives on a fixed logical field (``StageConfig.width`` by
``StageConfig.height``). Renderers map that field onto whatever window
area they are given, keeping its aspect ratio, and draw the dictionary
returned by ``StageController.get_state()``. They only read that
dictionary; nothing flows back into the stage.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Tuple

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]  # Allow import without pygame for headless


class RendererInterface(ABC):
    """
    Base for stage renderers.

    Owns the field-to-screen mapping. Subclasses implement ``render`` and
    place everything through ``_scale_x``, ``_scale_y`` and
    ``_scale_size`` so a resized window never distorts the field.
    """

    def __init__(self, field_width: int, field_height: int):
        self._base_width = field_width
        self._base_height = field_height
        self._scale = 1.0
        self._offset_x = 0
        self._offset_y = 0
        self._render_width = field_width
        self._render_height = field_height

    @abstractmethod
    def render(self, stage_state: Dict[str, Any], surface: "pygame.Surface") -> None:
        """
        Draw one frame of a stage.

        Args:
            stage_state: Dictionary from StageController.get_state(); holds
                hostiles, boss, pickups, input buffer, wall, bombs and outcome
            surface: Pygame surface to draw on
        """

    def get_preferred_size(self) -> Tuple[int, int]:
        """Window size that shows the field at scale 1."""
        return (self._base_width, self._base_height)

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        """
        Fit the field into a window area.

        The smaller of the two axis ratios wins, so the whole field stays
        visible; the area's top-left corner becomes field origin.
        """
        self._offset_x = x
        self._offset_y = y
        self._scale = min(width / self._base_width, height / self._base_height)
        self._render_width = int(self._base_width * self._scale)
        self._render_height = int(self._base_height * self._scale)

    def _scale_x(self, x: float) -> int:
        return int(self._offset_x + x * self._scale)

    def _scale_y(self, y: float) -> int:
        return int(self._offset_y + y * self._scale)

    def _scale_size(self, size: float) -> int:
        # Never collapse a visible element to nothing
        return max(1, int(size * self._scale))
