"""
Error types for Word Siege.
"""


class InvalidStageConfigError(ValueError):
    """Raised when a stage cannot define a terminal condition.

    A stage with a zero spawn total or a boss without words can never be
    won, so both are rejected when the stage is constructed.
    """
