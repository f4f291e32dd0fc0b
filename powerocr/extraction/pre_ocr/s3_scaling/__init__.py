"""Stage 3: Scaling."""

from .stage import ImageScalingStage

__all__ = ["ImageScalingStage"]
