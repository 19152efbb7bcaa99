# librarian

A command-line tool for managing a media library. It checks media files with
`ffprobe` and `ffmpeg` before it does anything else with them. It can copy
files into a destination directory and compare the MD5 checksums of the
original and the copy. At the end it prints a summary of what happened to each
file.

## Requirements

- Python 3.10 or later
- `ffmpeg` and `ffprobe` installed at `/usr/bin/ffmpeg` and `/usr/bin/ffprobe`.
  If either is missing, the command logs the failure and exits with status 1.

## Installation

```
pip install .
```

On every run, `librarian` creates `~/.config/golibrarian/` if that directory
does not exist. The `~/.config` directory itself must already exist. Log
records go to `golibrarian.log` in that directory, one JSON object per line.

## Usage

### validate

Check that one or more media files decode without errors:

```
librarian validate movie.mkv episode01.mp4
```

For each file, `ffprobe` reads the duration. Then `ffmpeg` decodes the whole
file. The file fails the check in any of these cases: `ffmpeg` writes anything
to its error output (the decode is stopped at once), `ffmpeg` exits with a
non-zero status, or the duration cannot be read. Progress appears on standard
error as `Analyzing: NN.NN%`.

### shelf

Copy files into a directory. The last argument is the destination directory,
and it must already exist:

```
librarian shelf movie.mkv episode01.mp4 /mnt/library/videos
```

Each file goes through these steps in order. Processing of a file stops at the
first step that fails:

1. resolve the destination path (`<dest>/<file name>`); the destination must
   exist and be a directory
2. read the file size
3. run the same integrity check as `validate`
4. compute the MD5 checksum of the original
5. copy the file, overwriting any file of the same name at the destination;
   progress appears on standard error as `Copying: NN%`
6. compute the MD5 checksum of the copy
7. compare the two checksums

`shelf` needs at least two paths. With fewer it prints an error and exits
with status 1.

### Options

You can give the options before or after the subcommand.

| Option | Effect |
| --- | --- |
| `-v`, `--cout` | Also write log records to standard output. Without it, log records go only to the log file. |
| `--hwaccel` | Decode with VAAPI (`/dev/dri/renderD128`, `iHD` driver) |
| `-f`, `--format` | Summary format: `table` (default) or `json`. Any other value prints no summary. |
| `-s`, `--dbstore` | Accepted, but has no effect |
| `-d`, `--dryrun` | Accepted, but has no effect |

### Summary

With `--format table`, the tool prints `Summary:` and then one row per file.
Each row has these columns: the success state (`true`/`false`), the file name,
the source checksum, the copy checksum, and the error, if there was one.

With `--format json`, the tool prints one JSON object keyed by absolute source
path. Each value holds `file_size`, `file_length` (seconds), `path`,
`dest_path`, `hash`, `copy_hash`, `err`, `details`, `state`,
`analysis_duration` and `copy_duration` (both in milliseconds).

The summary is also written to the log file as a record with the message
`summary`.

## Using it from Python

```python
from librarian.core import Librarian
from librarian.options import LibOptions

librarian = Librarian(LibOptions(format="json"))
cart = librarian.move_files(["movie.mkv"], "/mnt/library/videos")
for path, media in cart.media.items():
    print(path, media.state, media.err)
```

`Librarian` raises `FileNotFoundError` if the configured `ffmpeg_path` or
`ffprobe_path` does not exist. `validate_files` and `move_files` both return
the `Cart` they processed. Its `media` mapping holds one `Media` object per
file.

## What it does not do

- It does not store anything in a database. `--dbstore` is parsed and ignored.
- It has no dry-run mode. `--dryrun` is parsed and ignored, and `shelf`
  always copies.
- The destination must be an existing directory. Files cannot be renamed on
  copy, and directory trees are not copied.
- The command does not let you set the `ffmpeg` and `ffprobe` paths.

## Running the tests

```
pip install .[test]
pytest
```