'''Test-particle integration in a Plummer potential
Snapshot output file writer'''

import logging
from pathlib import Path
from typing import Optional, TextIO, Union
from .particle import ParticleState

logger = logging.getLogger(__name__)

# Column order of every snapshot line
COLUMNS = ('time', 'x', 'y', 'z', 'vx', 'vy', 'vz')


class OutputError(OSError):
    """Raised when the snapshot file cannot be opened or written."""


def format_snapshot(state: ParticleState) -> str:
    """
    Format a state as one output line (without newline).

    Fields are space separated in the order of COLUMNS, using Python's
    default float representation.
    """
    return ' '.join(str(float(value)) for value in state.to_numpy())


class SnapshotWriter:
    """
    Append-only writer for snapshot lines.

    The file is truncated on open. Each write goes straight to the file
    before returning, and the file is closed when the context exits,
    including on errors.

    Examples
    --------
    >>> with SnapshotWriter("orbit.txt") as writer:
    ...     writer.write(state)
    """
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._file: Optional[TextIO] = None
        self._count = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def count(self) -> int:
        """Number of snapshots written so far."""
        return self._count

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> "SnapshotWriter":
        """
        Create or truncate the output file.

        Raises
        ------
        OutputError
            If the file cannot be opened for writing
        """
        try:
            self._file = open(self._path, 'w', encoding='utf-8')
        except OSError as exc:
            raise OutputError(f"fail to open the output file '{self._path}': "
                              f"{exc.strerror or exc}") from exc
        self._count = 0
        logger.debug("Opened output file %s", self._path)
        return self

    def write(self, state: ParticleState):
        if self._file is None:
            raise OutputError(f"output file '{self._path}' is not open")
        try:
            self._file.write(format_snapshot(state) + '\n')
            self._file.flush()
        except OSError as exc:
            raise OutputError(f"fail to write to '{self._path}': {exc}") from exc
        self._count += 1

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.debug("Closed output file %s after %d snapshots",
                         self._path, self._count)

    def __enter__(self):
        return self.open()

    def __exit__(self, *args):
        self.close()

    def __repr__(self):
        state = "open" if self.is_open else "closed"
        return f"SnapshotWriter('{self._path}', {state}, count={self._count})"
