"""
Word Siege Renderer - Pygame-based visualization implementing RendererInterface.
Hostiles are drawn as labelled blocks walking down towards the wall.
"""

import pygame
from typing import Dict, Any, Tuple, List, Optional

from ..core.renderer_interface import RendererInterface


BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREEN = (0, 200, 90)
RED = (230, 60, 60)
CYAN = (0, 220, 255)
YELLOW = (255, 220, 0)
ORANGE = (255, 165, 0)
GREY = (110, 110, 120)

BACKGROUND_COLOR = (18, 20, 30)
WALL_COLOR = (150, 120, 90)
DANGER_COLOR = (70, 25, 30)
HOSTILE_COLORS = {
    "normal": (90, 160, 255),
    "fast": CYAN,
    "heavy": ORANGE,
}
BOSS_COLOR = (200, 60, 200)
PICKUP_COLORS = {
    "bomb_charge": YELLOW,
    "wall_repair": GREEN,
}
TYPED_COLOR = YELLOW
MISTAKE_COLOR = RED
HUD_COLOR = WHITE

HOSTILE_SIZE = (36, 28)
BOSS_SIZE = (90, 60)
PICKUP_RADIUS = 10


class WordSiegeRenderer(RendererInterface):
    """
    Renders a stage using Pygame, implementing RendererInterface.

    Each target shows its word with the typed prefix highlighted; the
    focused target gets an outline.
    """

    def __init__(self, width: int = 1280, height: int = 720):
        """
        Initialize the renderer.

        Args:
            width: Field width in pixels
            height: Field height in pixels
        """
        super().__init__(width, height)
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        super().set_render_area(x, y, width, height)
        # Fonts are sized at the old scale
        self._font = None
        self._big_font = None

    def _ensure_fonts(self) -> bool:
        if self._font is None:
            try:
                self._font = pygame.font.Font(None, self._scale_size(26))
                self._big_font = pygame.font.Font(None, self._scale_size(64))
            except Exception:
                return False
        return True

    def render(self, stage_state: Dict[str, Any], surface: pygame.Surface) -> None:
        """
        Render the stage state to a surface.

        Args:
            stage_state: Dictionary from StageController.get_state()
            surface: Pygame surface to draw on
        """
        bg_rect = pygame.Rect(
            self._offset_x,
            self._offset_y,
            self._render_width,
            self._render_height,
        )
        pygame.draw.rect(surface, BACKGROUND_COLOR, bg_rect)

        breach_y = stage_state.get("breach_y", self._base_height - 100)
        danger_zone = stage_state.get("danger_zone", 140)
        self._draw_field(surface, breach_y, danger_zone)

        if not self._ensure_fonts():
            return

        for pickup in stage_state.get("pickups", []):
            self._draw_pickup(surface, pickup)

        for hostile in stage_state.get("hostiles", []):
            self._draw_hostile(surface, hostile)

        boss = stage_state.get("boss")
        if boss:
            self._draw_boss(surface, boss)

        self._draw_input(surface, stage_state, breach_y)
        self._draw_hud(surface, stage_state)

        outcome = stage_state.get("outcome", "active")
        if outcome != "active":
            self._draw_outcome(surface, outcome)

    def _draw_field(self, surface: pygame.Surface, breach_y: float, danger_zone: float) -> None:
        """Draw the danger band and the wall."""
        danger_rect = pygame.Rect(
            self._scale_x(0),
            self._scale_y(breach_y - danger_zone),
            self._render_width,
            self._scale_size(danger_zone),
        )
        pygame.draw.rect(surface, DANGER_COLOR, danger_rect)

        wall_rect = pygame.Rect(
            self._scale_x(0),
            self._scale_y(breach_y),
            self._render_width,
            self._scale_size(12),
        )
        pygame.draw.rect(surface, WALL_COLOR, wall_rect)

    def _draw_word(
        self, surface: pygame.Surface, word: str, typed: int, center: Tuple[int, int],
        mistake: bool = False,
    ) -> None:
        """Draw a word with its typed prefix highlighted."""
        done = word[:typed]
        rest = word[typed:]
        done_width = self._font.size(done)[0] if done else 0
        rest_width = self._font.size(rest)[0] if rest else 0
        x = center[0] - (done_width + rest_width) // 2
        y = center[1]

        if done:
            surface.blit(self._font.render(done, True, TYPED_COLOR), (x, y))
        if rest:
            color = MISTAKE_COLOR if mistake else WHITE
            surface.blit(self._font.render(rest, True, color), (x + done_width, y))

    def _draw_hostile(self, surface: pygame.Surface, hostile: Dict[str, Any]) -> None:
        if hostile.get("state") not in ("spawning", "advancing"):
            return

        x = hostile.get("x", 0)
        y = hostile.get("y", 0)
        width, height = HOSTILE_SIZE
        color = HOSTILE_COLORS.get(hostile.get("archetype", "normal"), GREY)

        body = pygame.Rect(
            self._scale_x(x - width / 2),
            self._scale_y(y - height),
            self._scale_size(width),
            self._scale_size(height),
        )
        pygame.draw.rect(surface, color, body)
        if hostile.get("focused", False):
            pygame.draw.rect(surface, TYPED_COLOR, body, 2)
        if hostile.get("danger", False):
            pygame.draw.circle(
                surface, RED, (self._scale_x(x), self._scale_y(y - height - 6)),
                max(2, self._scale_size(3)),
            )

        self._draw_word(
            surface, hostile.get("word", ""), hostile.get("typed", 0),
            (self._scale_x(x), self._scale_y(y + 4)),
        )

    def _draw_boss(self, surface: pygame.Surface, boss: Dict[str, Any]) -> None:
        x = boss.get("x", 0)
        y = boss.get("y", 0)
        width, height = BOSS_SIZE

        body = pygame.Rect(
            self._scale_x(x - width / 2),
            self._scale_y(y - height),
            self._scale_size(width),
            self._scale_size(height),
        )
        color = GREY if boss.get("state") == "retreating" else BOSS_COLOR
        pygame.draw.rect(surface, color, body)
        if boss.get("focused", False):
            pygame.draw.rect(surface, TYPED_COLOR, body, 3)

        name = f"{boss.get('name', 'Boss')} ({boss.get('index', 0) + 1}/{boss.get('total_words', 1)})"
        label = self._font.render(name, True, HUD_COLOR)
        label_rect = label.get_rect()
        label_rect.centerx = self._scale_x(x)
        label_rect.bottom = self._scale_y(y - height - 4)
        surface.blit(label, label_rect)

        if boss.get("state") == "advancing":
            self._draw_word(
                surface, boss.get("word", ""), boss.get("typed", 0),
                (self._scale_x(x), self._scale_y(y + 4)),
            )

    def _draw_pickup(self, surface: pygame.Surface, pickup: Dict[str, Any]) -> None:
        if pickup.get("state") != "falling":
            return

        x = pickup.get("x", 0)
        y = pickup.get("y", 0)
        color = PICKUP_COLORS.get(pickup.get("kind"), GREY)
        pygame.draw.circle(
            surface, color, (self._scale_x(x), self._scale_y(y)), self._scale_size(PICKUP_RADIUS)
        )
        word = pickup.get("word", "")
        if word:
            self._draw_word(
                surface, word, pickup.get("typed", 0),
                (self._scale_x(x), self._scale_y(y + PICKUP_RADIUS + 4)),
            )

    def _draw_input(self, surface: pygame.Surface, state: Dict[str, Any], breach_y: float) -> None:
        """Draw the current target word and the typed buffer under the wall."""
        target = state.get("target_word", "")
        if not target:
            return
        typed = len(state.get("input", ""))
        self._draw_word(
            surface, target, typed,
            (self._scale_x(self._base_width / 2), self._scale_y(breach_y + 30)),
            mistake=state.get("is_mistake", False),
        )

    def _draw_hud(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        """Draw score, combo, wall health, bombs and wave progress."""
        score = state.get("score", {})
        wall = state.get("wall", {})
        bombs = state.get("bombs", {})

        lines = [
            f"SCORE: {score.get('score', 0)}",
            f"COMBO: {score.get('combo', 0)}",
            f"ACC: {score.get('accuracy', 1.0) * 100:.0f}%",
        ]
        for i, text in enumerate(lines):
            rendered = self._font.render(text, True, HUD_COLOR)
            surface.blit(rendered, (self._scale_x(10), self._scale_y(10 + i * 24)))

        right: List[str] = [
            f"WALL: {wall.get('current', 0)}/{wall.get('max', 0)}",
            f"BOMBS: {bombs.get('charges', 0)}/{bombs.get('max_charges', 0)}",
            f"WAVE: {state.get('spawned', 0)}/{state.get('total', 0)}",
        ]
        if bombs.get("cooldown_remaining", 0) > 0:
            right.append(f"RECHARGE: {bombs['cooldown_remaining'] / 1000:.1f}s")
        for i, text in enumerate(right):
            rendered = self._font.render(text, True, HUD_COLOR)
            rect = rendered.get_rect()
            rect.right = self._scale_x(self._base_width - 10)
            rect.top = self._scale_y(10 + i * 24)
            surface.blit(rendered, rect)

    def _draw_outcome(self, surface: pygame.Surface, outcome: str) -> None:
        text = "STAGE CLEAR" if outcome == "won" else "THE WALL HAS FALLEN"
        color = GREEN if outcome == "won" else RED
        rendered = self._big_font.render(text, True, color)
        rect = rendered.get_rect()
        rect.center = (
            self._scale_x(self._base_width / 2),
            self._scale_y(self._base_height / 2),
        )
        surface.blit(rendered, rect)
