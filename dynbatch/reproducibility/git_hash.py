"""Code provenance for run summaries.

The short git SHA of the checkout that produced a run is stored with its
summary so a batch sequence can be traced back to the generator version.
"""

import subprocess
from pathlib import Path

_PACKAGE_ROOT = Path(__file__).resolve().parents[2]


def _git_ok(args: list[str], cwd: Path) -> bool:
    """Run a quiet git command and report whether it exited 0."""
    try:
        subprocess.check_output(["git", *args], cwd=cwd, stderr=subprocess.DEVNULL)
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash(cwd: str | Path | None = None) -> str:
    """Short SHA of HEAD, suffixed with '-dirty' on uncommitted changes.

    The lookup runs from the package checkout (not the caller's working
    directory), since runs are usually launched from a data directory.

    Args:
        cwd: Repository to inspect. Defaults to the package checkout.

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout.
    """
    where = Path(cwd) if cwd is not None else _PACKAGE_ROOT
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=where,
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return "unknown"

    clean = _git_ok(["diff", "--quiet"], where) and _git_ok(
        ["diff", "--quiet", "--cached"], where
    )
    return sha if clean else f"{sha}-dirty"
