import os
import sys
import shutil
import subprocess
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[2]


def run_cli(args, cwd=None, env=None, timeout=60):
    """
    Run the CLI as a subprocess: python -m hanguldetector.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    cmd = [sys.executable, "-m", "hanguldetector.cli"] + list(map(str, args))
    run_env = dict(os.environ if env is None else env)
    run_env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), run_env.get("PYTHONPATH")]))
    run_env["PYTHONIOENCODING"] = "utf-8"
    return subprocess.run(
        cmd, cwd=cwd, env=run_env, capture_output=True, text=True, encoding="utf-8", timeout=timeout
    )


@pytest.fixture()
def dataset_dir(tmp_path: Path) -> Path:
    """
    Copy the embedded dataset into a temporary directory and return its path.
    """
    src = Path(__file__).parent / "assets" / "dataset"
    dst = tmp_path / "dataset"
    shutil.copytree(src, dst)
    return dst


@pytest.fixture()
def out_dir(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d


def report_files(directory: Path):
    return sorted(directory.glob("HangulDetector_*.txt"))


def read_report(directory: Path):
    reports = report_files(directory)
    assert len(reports) == 1, f"Expected exactly one report in {directory}, found {reports}"
    return reports[0].read_text(encoding="utf-8").splitlines()


def assert_exit_ok(proc):
    assert proc.returncode == 0, f"Non-zero exit:\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"
