"""Stage 2: Inversion."""

from .stage import ImageInversionStage

__all__ = ["ImageInversionStage"]
