"""Errors raised while building a season report."""

from typing import Optional, Sequence


class RacePointsError(Exception):
    """Base class for season report errors."""


class MalformedLineError(RacePointsError):
    """A digit-led line does not look like a finisher row."""

    def __init__(self, line: str, line_number: int, source: Optional[str] = None):
        self.line = line
        self.line_number = line_number
        self.source = source
        where = f'{source}:{line_number}' if source else f'line {line_number}'
        super().__init__(f'Badly formatted result line at {where}: "{line}"')


class MissingEventIdentifierError(RacePointsError):
    """A results file name does not contain an "event <number>" token."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f'Cannot determine event for "{filename}": '
            f'file names must contain "event <number>"'
        )


class DuplicateEventError(RacePointsError):
    """Two results files resolve to the same event."""

    def __init__(self, event_id: str, filenames: Sequence[str]):
        self.event_id = event_id
        self.filenames = tuple(filenames)
        super().__init__(
            f'Files {", ".join(repr(f) for f in self.filenames)} '
            f'are all results for {event_id}'
        )
