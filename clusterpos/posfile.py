"""Reading cluster positions from Illumina pos, locs and clocs files."""

from __future__ import annotations

import enum
import os
import struct
import warnings
from collections.abc import Sequence
from typing import BinaryIO

CLOCS_BLOCK_SIZE = 25
CLOCS_IMAGE_WIDTH = 2048
CLOCS_BLOCKS_PER_LINE = (CLOCS_IMAGE_WIDTH + CLOCS_BLOCK_SIZE - 1) // CLOCS_BLOCK_SIZE

_CLOCS_HEADER = struct.Struct("<BIB")
_LOCS_HEADER = struct.Struct("<3I")
_LOCS_RECORD = struct.Struct("<ff")
_FLOAT32 = struct.Struct("<f")


class PosFileType(enum.Enum):
    """Kind of position file, chosen from the file name's extension."""

    UNKNOWN = 0
    POS = 1
    LOCS = 2
    CLOCS = 3


class PosFileError(Exception):
    """Raised when a position file cannot be opened, read or used."""


_EXTENSIONS = {
    "clocs": PosFileType.CLOCS,
    "locs": PosFileType.LOCS,
    "txt": PosFileType.POS,
}


def _to_float32(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def _passes(pass_filter: Sequence[int] | None, index: int) -> bool:
    return pass_filter is None or bool(pass_filter[index] & 0x01)


def _file_type_for(fname: str) -> PosFileType:
    base = os.path.basename(fname)
    _, dot, ext = base.rpartition(".")
    if not dot:
        return PosFileType.UNKNOWN
    return _EXTENSIONS.get(ext, PosFileType.UNKNOWN)


class PosFile:
    """An open position file and the cluster coordinates loaded from it."""

    def __init__(self, fname: str | os.PathLike[str]) -> None:
        self.file_name = os.fspath(fname)
        self.file_type = _file_type_for(self.file_name)
        self.version = 0
        self.total_blocks = 0
        self.current_block = 0
        self.unread_clusters = 0
        self.x: list[int] = []
        self.y: list[int] = []
        self._fh: BinaryIO | None = None

        if self.file_type is PosFileType.UNKNOWN:
            raise PosFileError(f"{self.file_name}: unknown position file type")

        try:
            self._fh = open(self.file_name, "rb")
        except OSError as exc:
            raise PosFileError(f"{self.file_name}: {exc.strerror or exc}") from exc

        try:
            if self.file_type is PosFileType.CLOCS:
                header = self._read_header(_CLOCS_HEADER)
                self.version, self.total_blocks, self.unread_clusters = header
                self.current_block += 1
            elif self.file_type is PosFileType.LOCS:
                # the first two words are unused
                _, _, self.total_blocks = self._read_header(_LOCS_HEADER)
        except PosFileError:
            self._fh.close()
            self._fh = None
            raise

    def _read_header(self, layout: struct.Struct) -> tuple:
        raw = self._handle().read(layout.size)
        if len(raw) != layout.size:
            raise PosFileError(f"failed to read header from {self.file_name}")
        return layout.unpack(raw)

    def _handle(self) -> BinaryIO:
        if self._fh is None:
            raise PosFileError(f"{self.file_name}: file is closed")
        return self._fh

    @property
    def size(self) -> int:
        """Number of cluster positions currently loaded."""
        return len(self.x)

    def seek(self, cluster: int) -> None:
        """Position a locs file at the record of the given cluster."""
        if self.file_type is not PosFileType.LOCS:
            raise PosFileError("can only seek in position files of type locs")
        pos = 12 + cluster * 8
        try:
            self._handle().seek(pos)
        except (OSError, ValueError) as exc:
            raise PosFileError(
                f"trying to seek on {self.file_name} to {pos} (cluster {cluster}): {exc}"
            ) from exc

    def close(self) -> None:
        """Close the underlying file; the loaded positions stay available."""
        if self._fh is None:
            return
        fh, self._fh = self._fh, None
        try:
            fh.close()
        except OSError as exc:
            raise PosFileError(f"can't close posfile {self.file_name}: {exc}") from exc

    def load(self, bufsize: int = 0, pass_filter: Sequence[int] | None = None) -> None:
        """Load cluster positions, keeping only clusters whose filter flag has bit 0 set.

        ``bufsize`` is a sizing hint for clocs files and has no effect on the result.
        """
        if self.file_type is PosFileType.CLOCS:
            self._load_clocs(pass_filter)
        elif self.file_type is PosFileType.LOCS:
            self._load_locs(pass_filter)

    def _load_locs(self, pass_filter: Sequence[int] | None) -> None:
        expected = self.total_blocks * _LOCS_RECORD.size
        buffer = self._handle().read(expected)
        if len(buffer) != expected:
            raise PosFileError(
                f"locs load ({self.file_name}): expected {expected}, read {len(buffer)}"
            )

        xs: list[int] = []
        ys: list[int] = []
        for index, (dx, dy) in enumerate(_LOCS_RECORD.iter_unpack(buffer)):
            if pass_filter is not None and index >= len(pass_filter):
                break
            if _passes(pass_filter, index):
                xs.append(int(_to_float32(10 * dx) + 1000.5))
                ys.append(int(_to_float32(10 * dy) + 1000.5))
        self.x, self.y = xs, ys

    def _load_clocs(self, pass_filter: Sequence[int] | None) -> None:
        fh = self._handle()
        start = fh.tell()
        data = fh.read()
        pos = 0
        xs: list[int] = []
        ys: list[int] = []
        index = 0

        while True:
            while self.unread_clusters == 0 and self.current_block < self.total_blocks:
                if pos >= len(data):
                    break
                self.unread_clusters = data[pos]
                pos += 1
                self.current_block += 1

            if self.unread_clusters == 0:
                break
            self.unread_clusters -= 1

            if pos + 2 > len(data):
                pos = len(data)
                warnings.warn(
                    f"clocs load ({self.file_name}): reached end of file with "
                    f"{self.unread_clusters} clusters and "
                    f"{self.total_blocks - self.current_block} blocks unread",
                    RuntimeWarning,
                    stacklevel=3,
                )
                break
            dx, dy = data[pos], data[pos + 1]
            pos += 2

            if _passes(pass_filter, index):
                block = self.current_block - 1
                xs.append(
                    10 * CLOCS_BLOCK_SIZE * (block % CLOCS_BLOCKS_PER_LINE) + dx + 1000
                )
                ys.append(
                    10 * CLOCS_BLOCK_SIZE * (block // CLOCS_BLOCKS_PER_LINE) + dy + 1000
                )
            index += 1

        fh.seek(start + pos)
        self.x, self.y = xs, ys

    def get_x(self, cluster: int) -> int:
        """X coordinate of a loaded cluster."""
        return self.x[cluster]

    def get_y(self, cluster: int) -> int:
        """Y coordinate of a loaded cluster."""
        return self.y[cluster]

    def __enter__(self) -> PosFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_posfile(fname: str | os.PathLike[str]) -> PosFile:
    """Open a pos, locs or clocs file and read its header."""
    return PosFile(fname)