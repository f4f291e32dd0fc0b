"""
Pre-OCR: подготовка изображения перед распознаванием.

pad -> invert -> conditional scale, плюс кодек (decode/encode).
"""

from .pipeline import PowerPreOCRPipeline
from .image_decoder import ImageDecoder
from .image_encoder import ImageEncoder
from .s1_padding import ImagePaddingStage
from .s2_inversion import ImageInversionStage
from .s3_scaling import ImageScalingStage

__all__ = [
    "PowerPreOCRPipeline",
    "ImageDecoder",
    "ImageEncoder",
    "ImagePaddingStage",
    "ImageInversionStage",
    "ImageScalingStage",
]
