"""
Core abstractions for Word Siege.

Provides the word target capability interface, the renderer interface
and the error types shared by every subsystem.
"""

from .word_target import WordTarget, TargetKind, TypingProgressMixin
from .renderer_interface import RendererInterface
from .errors import InvalidStageConfigError

__all__ = [
    'WordTarget',
    'TargetKind',
    'TypingProgressMixin',
    'RendererInterface',
    'InvalidStageConfigError',
]
