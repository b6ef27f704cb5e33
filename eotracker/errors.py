"""
Error classes for the executive order tracker.

- SnapshotLoadError: the snapshot could not be fetched or parsed. The table
  controller catches it at its boundary and shows a "failed to load" row.
- SnapshotWriteError: the snapshot could not be written. Fatal for the
  builder CLI.

Registry API failures are not modelled here; the builder catches the
underlying requests exceptions and substitutes sample data.
"""


class EOTrackerError(Exception):
    """Base exception for the executive order tracker."""
    pass


class SnapshotError(EOTrackerError):
    """Base class for snapshot read/write failures."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class SnapshotLoadError(SnapshotError):
    """Snapshot fetch failed, returned a non-2xx status, or had a malformed body."""
    pass


class SnapshotWriteError(SnapshotError):
    """Snapshot could not be written to the local filesystem."""
    pass
