"""
Models for teknify.

Immutable dataclasses shared by the client, the task runner and the presenter.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


DEFAULT_ENDPOINT = "https://api.teknik.io/v1/Upload"


class OutputMode(Enum):
    """How a successful reply is rendered."""
    JSON = "json"
    NAME_AND_URL = "name_and_url"
    URL_ONLY = "url_only"


class OutcomeKind(Enum):
    """Terminal classification of one file's upload."""
    SUCCESS = "success"
    APPLICATION_ERROR = "application_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class UploadRequest:
    """One file queued for upload."""
    path: Path
    sequence_id: int


@dataclass(frozen=True)
class RawResponse:
    """Status code and full body text of an upload reply."""
    status_code: int
    body: str

    @property
    def is_ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TransportFailure:
    """The request could not be built, sent, or read back."""
    message: str


@dataclass(frozen=True)
class TaskOutcome:
    """Immutable outcome of one upload task."""
    path: Path
    kind: OutcomeKind
    text: Optional[str] = None
    error: Optional[str] = None
    sequence_id: int = 0

    @property
    def success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def ok(cls, path: Path, text: str, sequence_id: int = 0):
        return cls(path=path, kind=OutcomeKind.SUCCESS, text=text, sequence_id=sequence_id)

    @classmethod
    def application_error(cls, path: Path, error: str, sequence_id: int = 0):
        return cls(
            path=path,
            kind=OutcomeKind.APPLICATION_ERROR,
            error=error,
            sequence_id=sequence_id
        )

    @classmethod
    def transport_error(cls, path: Path, error: str, sequence_id: int = 0):
        return cls(
            path=path,
            kind=OutcomeKind.TRANSPORT_ERROR,
            error=error,
            sequence_id=sequence_id
        )


@dataclass(frozen=True)
class Reply:
    """Interpreted server reply: display text or a diagnostic."""
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, text: str):
        return cls(text=text)

    @classmethod
    def fail(cls, error: str):
        return cls(error=error)


@dataclass(frozen=True)
class UploadConfig:
    """Immutable configuration for a batch of uploads."""
    files: Tuple[Path, ...] = ()
    concurrency: int = 1
    verbose: bool = False
    output_mode: OutputMode = OutputMode.NAME_AND_URL
    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None  # None disables httpx timeouts

    def __post_init__(self):
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int):
            raise ValueError(f"concurrency must be an integer, got {self.concurrency!r}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
