"""
Pytest configuration and fixtures for Word Siege tests.

This module sets up pygame mocking to allow testing the renderer and the
play script without requiring a display or actual pygame initialization.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


def create_mock_pygame():
    """Create a comprehensive mock of the pygame module."""
    mock_pygame = MagicMock()

    # Basic initialization
    mock_pygame.init.return_value = (6, 0)  # (success, fail) count
    mock_pygame.quit.return_value = None

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 1280
    mock_surface.get_height.return_value = 720
    mock_surface.get_size.return_value = (1280, 720)
    mock_surface.fill.return_value = None
    mock_surface.blit.return_value = None
    mock_pygame.display.set_mode.return_value = mock_surface
    mock_pygame.display.set_caption.return_value = None
    mock_pygame.display.flip.return_value = None

    # Fonts
    mock_font = MagicMock()
    mock_font.render.return_value = MagicMock()  # Returns a surface
    mock_font.size.return_value = (100, 30)  # (width, height)
    mock_pygame.font.Font.return_value = mock_font
    mock_pygame.font.SysFont.return_value = mock_font
    mock_pygame.font.init.return_value = None

    # Drawing
    mock_pygame.draw.rect.return_value = None
    mock_pygame.draw.line.return_value = None
    mock_pygame.draw.circle.return_value = None

    # Events
    mock_pygame.event.get.return_value = []

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.KEYUP = 769
    mock_pygame.VIDEORESIZE = 16
    mock_pygame.RESIZABLE = 16
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_RETURN = 13
    mock_pygame.K_BACKSPACE = 8
    mock_pygame.K_SPACE = 32
    mock_pygame.K_a = 97
    mock_pygame.K_n = 110
    mock_pygame.K_r = 114
    mock_pygame.K_LSHIFT = 1073742049

    # Time
    mock_clock = MagicMock()
    mock_clock.tick.return_value = 16  # ~60fps
    mock_pygame.time.Clock.return_value = mock_clock
    mock_pygame.time.get_ticks.return_value = 0

    # Rect
    mock_pygame.Rect = MagicMock(side_effect=lambda *args: MagicMock(
        x=args[0] if args else 0,
        y=args[1] if len(args) > 1 else 0,
        width=args[2] if len(args) > 2 else 0,
        height=args[3] if len(args) > 3 else 0,
    ))

    # Surface creation
    mock_pygame.Surface.return_value = mock_surface

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame before any imports.

    This runs automatically for all tests and ensures pygame
    is mocked before any visualization modules are imported.
    """
    mock_pygame = create_mock_pygame()

    # Store original module if it exists
    original_pygame = sys.modules.get('pygame')

    # Install mock
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    # Restore original (or remove mock)
    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


@pytest.fixture
def mock_screen(mock_pygame_module):
    """Provide a mock pygame screen surface."""
    screen = MagicMock()
    screen.get_width.return_value = 1280
    screen.get_height.return_value = 720
    screen.get_size.return_value = (1280, 720)
    screen.fill.return_value = None
    screen.blit.return_value = None
    return screen


@pytest.fixture
def stage_config():
    """Small, deterministic stage: one path, fixed speed, no drops."""
    from wordsiege.stage.config import StageConfig, SpawnConfig, BombConfig, BossConfig

    return StageConfig(
        wall_max_health=3,
        drop_rate=0.0,
        spawn=SpawnConfig(
            total=4,
            interval=1000,
            max_concurrent=2,
            speed_min=100,
            speed_max=100,
            paths=["straight"],
        ),
        bombs=BombConfig(initial=1, max=2, cooldown=5000, combo_threshold=6),
        boss=BossConfig(name="Test Boss", words=["shadow", "focus"], speed=50, pushback=100),
    )


@pytest.fixture
def word_pool():
    """Word pool covering every archetype bucket."""
    return ["fire", "storm", "castle", "lantern", "barricade", "stronghold"]


@pytest.fixture
def make_hostile():
    """Factory for advancing hostiles placed by hand."""
    from wordsiege.entities.hostile import Hostile, HostileArchetype

    def _make(hostile_id, word, y=100.0, archetype=HostileArchetype.NORMAL, speed=100.0):
        hostile = Hostile(
            id=hostile_id,
            word=word,
            x=640.0,
            y=y,
            speed=speed,
            breach_y=620.0,
            field_width=1280.0,
            archetype=archetype,
        )
        hostile.activate()
        return hostile

    return _make


@pytest.fixture
def controller(stage_config, word_pool):
    """Stage controller with a fixed seed."""
    from wordsiege.stage.controller import StageController

    return StageController(stage_config, word_pool, seed=42)
