"""Stage 1: Padding."""

from .stage import ImagePaddingStage

__all__ = ["ImagePaddingStage"]
