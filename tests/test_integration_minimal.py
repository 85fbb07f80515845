#!/usr/bin/env python3
import shutil
import sys
import zipfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from agent import execute, make_context
from config import Config


class _Yes:
    def confirm(self, message):
        return True

    def alert(self, message):
        pass


@pytest.mark.skipif(shutil.which("zip") is None, reason="zip not installed")
def test_zip_largest_files_with_real_zip(tmp_path):
    home = tmp_path / "home"
    downloads = home / "Downloads"
    downloads.mkdir(parents=True)
    (downloads / "one file.txt").write_bytes(b"a" * 300)
    (downloads / "two.txt").write_bytes(b"b" * 200)
    (downloads / "three.txt").write_bytes(b"c" * 100)
    (downloads / "four.txt").write_bytes(b"d" * 10)

    cfg = Config.from_dict({"paths": {"home_dir": str(home), "config_dir": str(tmp_path / "cfg")}})
    result = execute("Find the 3 largest files in ~/Downloads and zip them", make_context(cfg, _Yes()))

    with zipfile.ZipFile(result["archive"]) as z:
        assert sorted(z.namelist()) == ["one file.txt", "three.txt", "two.txt"]
    summary = (home / "agent_operation_summary.md").read_text()
    assert "**Operation:** Largest Files Archive" in summary
    assert (tmp_path / "cfg" / "command_log.jsonl").exists()


@pytest.mark.skipif(shutil.which("zip") is None, reason="zip not installed")
def test_dash_named_files_with_real_zip(tmp_path):
    home = tmp_path / "home"
    downloads = home / "Downloads"
    downloads.mkdir(parents=True)
    (downloads / "-m").write_bytes(b"a" * 300)
    (downloads / "-T").write_bytes(b"b" * 200)
    (downloads / "keep.txt").write_bytes(b"c" * 100)

    cfg = Config.from_dict({"paths": {"home_dir": str(home), "config_dir": str(tmp_path / "cfg")}})
    result = execute("Find the 3 largest files in ~/Downloads and zip them", make_context(cfg, _Yes()))

    with zipfile.ZipFile(result["archive"]) as z:
        assert sorted(z.namelist()) == ["-T", "-m", "keep.txt"]
    for name in ("-m", "-T", "keep.txt"):
        assert (downloads / name).is_file()
