"""Base types for help formatters."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any


class AppFormatMode(enum.Enum):
    """The kind of help being requested."""

    NORMAL = enum.auto()
    ALL = enum.auto()
    SUB = enum.auto()


class FormatterBase(ABC):
    """Minimal formatter: a first-column width, user labels and ``make_help``."""

    def __init__(self, column_width: int = 30, labels: Mapping[str, str] | None = None) -> None:
        self.column_width = column_width
        self.labels: dict[str, str] = dict(labels or {})

    def label(self, key: str) -> str:
        """Return the label for ``key``, or ``key`` itself if none is set."""
        return self.labels.get(key, key)

    @abstractmethod
    def make_help(self, app: Any, name: str, mode: AppFormatMode) -> str:
        """Build the help text for ``app``."""


class FormatterLambda(FormatterBase):
    """Formatter that delegates help generation to a callable."""

    def __init__(self, func: Callable[[Any, str, AppFormatMode], str]) -> None:
        super().__init__()
        self._func = func

    def make_help(self, app: Any, name: str, mode: AppFormatMode) -> str:
        return self._func(app, name, mode)