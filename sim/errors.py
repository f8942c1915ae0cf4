#!/usr/bin/env python3
"""
sim/errors.py
=============
Exceptions raised while validating a submitted schedule.

Every error is fatal to the run: validation stops at the first problem and
the engine never sees a partially applied schedule.  All kinds derive from
:class:`SubmissionError` (itself a :class:`ValueError`) so callers can catch
the whole family at the process boundary.
"""

from __future__ import annotations

from typing import Optional


class SubmissionError(ValueError):
    """Base class for every submission validation failure.

    Parameters
    ----------
    message : str
        Human-readable description.
    line : int or None
        1-based line number of the submission file the error refers to.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    @property
    def kind(self) -> str:
        return type(self).__name__


class TruncatedSubmission(SubmissionError):
    """The file ended before the declared counts were satisfied."""


class MalformedCount(SubmissionError):
    """A declared count is not a non-negative integer."""


class DuplicateIntersectionSchedule(SubmissionError):
    """The same intersection was scheduled more than once."""


class StreetIntersectionMismatch(SubmissionError):
    """A scheduled street does not enter the intersection listing it."""


class MalformedGreenDuration(SubmissionError):
    """A green-light duration is not an integer."""


class GreenDurationOutOfRange(SubmissionError):
    """A green-light duration is below 1 or above the simulation duration."""
