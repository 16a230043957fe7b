"""Prospect-and-generate pipeline."""

from .factory import build_provider
from .orchestrator import BatchGenerator, BatchRun, PipelineStage, TopicOutcome

__all__ = ["BatchGenerator", "BatchRun", "PipelineStage", "TopicOutcome", "build_provider"]
