""" This module contains custom types used in the faptopia package. """

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class InvalidQueryError(ValueError):
    """ Raised when a command line or URL input has the wrong format. """


class MediaKind(Enum):
    """ Represents how a media item gets embedded in the gallery """
    VIDEO = 1
    EMBED = 2


@dataclass(frozen=True)
class MediaItem:
    """ A single directly playable piece of media """
    url: str
    kind: MediaKind


@dataclass
class Section:
    """ The results of one source query, rendered as one gallery tab """
    label: str
    items: list[MediaItem] = field(default_factory=list)


@dataclass(frozen=True)
class SubredditQuery:
    """ A subreddit listing request, written as source:modifier:time on the command line """
    source: str
    modifier: str
    time: str

    @classmethod
    def parse(cls, text: str) -> "SubredditQuery":
        """ Splits something like hotwife:top:month into its three parts """
        parts = text.split(":")
        if len(parts) != 3 or not all(parts):
            raise InvalidQueryError(f"Invalid format '{text}'. Use format: subreddit:modifier:time")
        return cls(*parts)

    @property
    def label(self) -> str:
        return f"r/{self.source}"


@dataclass(frozen=True)
class Failure:
    """ Why a single thread, query or identifier produced no media """
    key: str
    error: str


@dataclass
class Batch(Generic[T]):
    """ Successful results of a batch, kept apart from its per-item failures """
    results: list[T] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)

    def add(self, result: T) -> None:
        self.results.append(result)

    def extend(self, results: list[T]) -> None:
        self.results.extend(results)

    def fail(self, key: object, error: Exception | str) -> None:
        self.failures.append(Failure(str(key), str(error)))

    def ok(self) -> bool:
        """ Returns True if no item of the batch failed """
        return len(self.failures) == 0


@dataclass
class Settings:
    """ Runtime configuration, optionally loaded from a JSON file """
    user_agent: str = "python:faptopia:v1.0"
    board: str = "gif"
    max_tries: int = 1
    backoff_factor: float = 0.5
    timeout: int = 30
    prefix: str = "faptopia"

    def __post_init__(self):
        for setting in fields(self):
            value = getattr(self, setting.name)
            expected = (int, float) if setting.type is float else setting.type
            if isinstance(value, bool) or not isinstance(value, expected):
                raise TypeError(f"{setting.name} must be of type {setting.type.__name__}, got {value!r}")
        if self.max_tries < 1:
            raise ValueError(f"max_tries must be at least 1, got {self.max_tries}")
        if self.timeout <= 0 or self.backoff_factor < 0:
            raise ValueError("timeout must be positive and backoff_factor must not be negative")


class SaveStatus(str, Enum):
    """ Represents the outcome of writing a gallery """
    SAVED = "saved"
    EMPTY = "empty"
