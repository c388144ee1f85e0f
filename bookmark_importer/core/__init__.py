"""
Core bookmark import modules.

This package contains format detection, content validation, the format
parsers, post-processing and the import pipeline that ties them together.
"""

from .content_validator import ContentValidator
from .format_detector import DetectionResult, FormatDetector
from .import_module import BookmarkImporter, ImportOptions
from .post_processor import PostProcessingResult, PostProcessor

__all__ = [
    "FormatDetector",
    "DetectionResult",
    "ContentValidator",
    "PostProcessor",
    "PostProcessingResult",
    "BookmarkImporter",
    "ImportOptions",
]
