import json
import os
import sys

import pytest

from librarian import logger
from librarian.cart import Cart
from librarian.integrity import checksum_file
from librarian.media import MediaError
from librarian.options import LibOptions


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path, monkeypatch):
    instance = logger.Logger(tmp_path / "test.log")
    instance.disable_console()
    monkeypatch.setattr(logger, "_instance", instance)
    yield instance
    instance.close()


def _script(path, body):
    path.write_text(f"#!{sys.executable}\n{body}")
    path.chmod(0o755)
    return str(path)


@pytest.fixture
def options(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    ffprobe = _script(bin_dir / "ffprobe", 'print("2.0")\n')
    ffmpeg = _script(
        bin_dir / "ffmpeg",
        'print("out_time_ms=2000000")\nprint("progress=end")\n',
    )
    return LibOptions(ffmpeg_path=ffmpeg, ffprobe_path=ffprobe)


@pytest.fixture
def sources(tmp_path):
    directory = tmp_path / "in"
    directory.mkdir()
    paths = []
    for name, payload in (("one.mkv", b"first"), ("two.mkv", b"second" * 50)):
        path = directory / name
        path.write_bytes(payload)
        paths.append(path)
    return paths


def test_cart_keys_are_absolute_paths(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cart = Cart(["a.mkv", "sub/b.mkv"])
    expected = [os.path.join(str(tmp_path), "a.mkv"), os.path.join(str(tmp_path), "sub", "b.mkv")]
    assert list(cart.media) == expected
    for key in expected:
        assert cart.get_media_state(key).path == key


def test_duplicate_paths_collapse(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cart = Cart(["a.mkv", os.path.join(str(tmp_path), "a.mkv")])
    assert len(cart.media) == 1


def test_get_media_state_unknown_path():
    assert Cart([]).get_media_state("/nothing/here") is None


def test_copy_files_success(tmp_path, sources, options, capsys):
    dest = tmp_path / "shelf"
    dest.mkdir()
    cart = Cart(str(path) for path in sources)
    cart.copy_files(str(dest), options)
    for path in sources:
        item = cart.get_media_state(str(path))
        assert item.err is None
        assert item.state is True
        assert item.hash == item.copy_hash == checksum_file(path)
        assert item.file_size == len(path.read_bytes())
        assert (dest / path.name).read_bytes() == path.read_bytes()
    assert capsys.readouterr().out.startswith("Summary:\n")


def test_copy_files_missing_destination(tmp_path, sources, options):
    dest = tmp_path / "missing"
    cart = Cart(str(path) for path in sources)
    cart.copy_files(str(dest), options)
    for item in cart.media.values():
        assert item.err is MediaError.DEST_PATH_NOT_EXIST
        assert item.state is False
        assert item.hash == ""
    assert not dest.exists()


def test_copy_files_stops_after_missing_source(tmp_path, options):
    dest = tmp_path / "shelf"
    dest.mkdir()
    cart = Cart([str(tmp_path / "ghost.mkv")])
    cart.copy_files(str(dest), options)
    item = cart.get_media_state(str(tmp_path / "ghost.mkv"))
    assert isinstance(item.err, FileNotFoundError)
    assert not (dest / "ghost.mkv").exists()


def test_validate_files(sources, options):
    cart = Cart(str(path) for path in sources)
    cart.validate_files(options)
    for item in cart.media.values():
        assert item.err is None
        assert item.file_length == 2.0
        assert item.dest_path == ""


def test_print_summary_json(sources, capsys):
    cart = Cart(str(path) for path in sources)
    cart.print_summary(LibOptions(format="json"))
    output = capsys.readouterr().out.strip().splitlines()
    data = json.loads(output[-1])
    assert sorted(data) == sorted(str(path) for path in sources)
    for key, value in data.items():
        assert value["path"] == key
        assert value["state"] is True
        assert value["err"] is None


def test_print_summary_table(sources, capsys):
    cart = Cart(str(path) for path in sources)
    cart.print_summary(LibOptions(format="table"))
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Summary:"
    assert len(lines) == 1 + len(sources)
    assert lines[1].startswith("true  ")
    assert sources[0].name in lines[1]


def test_print_summary_unknown_format_prints_nothing(sources, capsys):
    Cart(str(path) for path in sources).print_summary(LibOptions(format="yaml"))
    assert capsys.readouterr().out == ""


def test_summary_rows_truncate_hashes(sources):
    cart = Cart([str(sources[0])])
    item = cart.get_media_state(str(sources[0]))
    item.hash = "a" * 40
    item.copy_hash = "b" * 40
    item.fail_checksum_validation()
    (row,) = list(cart.summary_rows())
    assert "a" * 33 in row
    assert "a" * 34 not in row
    assert "b" * 34 not in row
    assert row.startswith("false ")
    assert row.endswith(str(MediaError.FAILED_CHECKSUM_VALIDATION))


def test_summary_logged_to_file(quiet_logger, sources):
    cart = Cart(str(path) for path in sources)
    cart.print_summary(LibOptions(format="none"))
    with open(quiet_logger.path, encoding="utf-8") as handle:
        record = json.loads(handle.read().strip().splitlines()[-1])
    assert record["msg"] == "summary"
    assert sorted(record["data"]) == sorted(str(path) for path in sources)