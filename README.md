# clusterpos

Read the cluster position files that Illumina sequencers write for each tile,
and turn them into integer X/Y coordinates.

Everything lives in the `clusterpos.posfile` module.

## Supported formats

The file type is chosen from the file name's extension and is available as
`PosFile.file_type`, a member of `PosFileType`:

- **`.locs`** (`PosFileType.LOCS`): a 12-byte header whose third
  little-endian 32-bit word is the number of clusters, then one pair of
  little-endian 32-bit floats per cluster. Each coordinate becomes
  `int(10 * value + 1000.5)`, computed in single precision.
- **`.clocs`** (`PosFileType.CLOCS`): a header of a version byte, a 32-bit
  block count and the first block's cluster count, then compressed positions
  grouped into 25-pixel blocks (`CLOCS_BLOCK_SIZE`), `CLOCS_BLOCKS_PER_LINE`
  blocks across a 2048-pixel image (`CLOCS_IMAGE_WIDTH`). Each cluster is
  placed at its block's offset (ten times the block size per block), plus its
  one-byte in-block offset, plus 1000.
- **`.txt`** (`PosFileType.POS`): recognised and opened, but `load()` reads
  nothing from it.

Any other extension is `PosFileType.UNKNOWN` and opening it fails.

## Usage

```python
from clusterpos import posfile

with posfile.open_posfile("s_1_1101.clocs") as pos:
    pos.load(0, None)
    print(pos.version, pos.total_blocks, pos.size)
    print(pos.get_x(0), pos.get_y(0))
```

- `open_posfile(fname)` (or `PosFile(fname)`) opens the file and reads its
  header, setting `version` (clocs), `total_blocks` and `current_block`.
- `load(bufsize=0, pass_filter=None)` reads the cluster positions into the
  lists `x` and `y`; `size` is the number loaded. `bufsize` is accepted for
  clocs files but does not change the result. `pass_filter` is either `None`,
  which keeps every cluster, or a sequence of per-cluster filter bytes: only
  clusters whose lowest bit is set are kept. For locs files, reading stops at
  the end of the filter.
- `get_x(cluster)` and `get_y(cluster)` return a loaded cluster's coordinates.
- `seek(cluster)` moves a locs file to the record of the given cluster, so that
  a following `load()` starts there.
- `close()` closes the file; it is also called when a `with` block ends. The
  loaded coordinates stay available.

## Errors and warnings

`PosFileError` is raised for an unknown file extension, a file that cannot be
opened, a short header, truncated locs data, a `seek()` on anything but a locs
file, and reading from a closed file.

A clocs file that ends before all its declared clusters are read does not
raise: the positions read so far are kept and a `RuntimeWarning` is issued.

## Limitations

- Text (`.txt`) position files are not parsed.
- Compressed (`.gz`) position files are not read.
- There is no command-line tool; the package is a library only.

## Running the tests

```
pip install clusterpos[test]
pytest
```