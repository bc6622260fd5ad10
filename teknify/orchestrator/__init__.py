"""Orchestrator package - coordinates batch upload workflows."""
from .core import UploadOrchestrator, run_batch
from .parallel import default_concurrency
from .task import UploadTask

__all__ = ["UploadOrchestrator", "UploadTask", "default_concurrency", "run_batch"]
