import re
from pathlib import Path

from .conftest import run_cli, read_report, assert_exit_ok


def test_dir_scan_writes_sorted_report(dataset_dir: Path, out_dir: Path):
    proc = run_cli([dataset_dir, "--out", out_dir, "--no-progress"])
    assert_exit_ok(proc)

    root = dataset_dir.as_posix()
    assert read_report(out_dir) == [
        f'{root}/Library/Cache.cs (1): public class Cache {{ string key = "캐시"; }}',
        f'{root}/Scripts/Editor/Tool.cs (6): public string Label = "도구";',
        f'{root}/Scripts/Player.cs (6): private string m_Name = "용사";',
        f'{root}/Scripts/Player.cs (12): var greeting = "안녕하세요, " + m_Name;',
        f'{root}/Scripts/UI/Messages.cs (3): public const string Title = "제목";',
        f'{root}/Scripts/UI/Messages.cs (6): public const string Jamo = "ㅋㅋ";',
    ]


def test_report_path_printed_and_named_with_timestamp(dataset_dir: Path, out_dir: Path):
    proc = run_cli([dataset_dir, "--out", out_dir, "--no-progress"])
    assert_exit_ok(proc)

    printed = Path(proc.stdout.strip().splitlines()[-1])
    assert printed.parent == out_dir
    assert re.fullmatch(r"HangulDetector_\d{4}-\d{2}-\d{2}_\d{6}\.txt", printed.name)
    assert printed.exists()


def test_detections_logged_as_found(dataset_dir: Path, out_dir: Path):
    proc = run_cli([dataset_dir, "--out", out_dir, "--no-progress"])
    assert_exit_ok(proc)

    assert "[HangulDetector] Start." in proc.stderr
    assert "[HangulDetector] Find Files: 4" in proc.stderr
    assert '[HangulDetector] Player.cs (6): private string m_Name = "용사";' in proc.stderr
    assert "[HangulDetector] Complete." in proc.stderr
