"""Console rendering for teknify upload outcomes."""
from __future__ import annotations

from typing import Iterable

from rich.console import Console

from .models import TaskOutcome, UploadConfig, UploadRequest


class OutputPresenter:
    """
    Writes results to stdout and errors/progress to stderr.

    Lines carrying reply text, paths or server messages are written straight
    to the console's stream, one ``write`` per line, so they reach the
    terminal byte for byte (tabs and carriage returns included). Only the
    fixed-format verbose diagnostics go through ``Console.print``.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._out = Console(highlight=False, soft_wrap=True, emoji=False, markup=False)
        self._err = Console(
            stderr=True, highlight=False, soft_wrap=True, emoji=False, markup=False
        )

    def _write_line(self, message: str, stderr: bool = False) -> None:
        stream = (self._err if stderr else self._out).file
        stream.write(message + "\n")
        stream.flush()

    def _echo(self, message: str) -> None:
        self._err.print(message)

    def render_configuration_summary(self, config: UploadConfig) -> None:
        if self.verbose:
            self._echo(f"Concurrent uploads: {config.concurrency}")

    def on_task_start(self, request: UploadRequest) -> None:
        if self.verbose:
            self._write_line(f"Uploading {request.path}", stderr=True)

    def present(self, outcome: TaskOutcome) -> None:
        if outcome.success:
            self._write_line(outcome.text or "")
            return
        self._write_line(f"Error processing {outcome.path}: {outcome.error}", stderr=True)

    def render_batch_summary(self, outcomes: Iterable[TaskOutcome]) -> None:
        if not self.verbose:
            return
        outcomes = list(outcomes)
        failed = sum(1 for o in outcomes if not o.success)
        self._echo(f"Uploaded {len(outcomes) - failed}/{len(outcomes)} files ({failed} failed)")
