"""Pipeline architecture for page reads."""

from .base import PageContext, ReadPipeline, ReadStep

__all__ = ["PageContext", "ReadPipeline", "ReadStep"]
