"""Pipeline steps for page reads."""

from .convert import CleanStep, ConvertStep, TitleStep
from .fallback import NotFoundFallbackStep, not_found_document, not_found_notice
from .fetch import FetchStep, StatusGuardStep
from .guard import ContentLengthStep

__all__ = [
    "CleanStep",
    "ContentLengthStep",
    "ConvertStep",
    "FetchStep",
    "NotFoundFallbackStep",
    "StatusGuardStep",
    "TitleStep",
    "not_found_document",
    "not_found_notice",
]
