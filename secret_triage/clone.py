"""Shallow repository acquisition through external git/hg clients."""

import os
import signal
import subprocess
import threading
import time
from pathlib import Path

from .errors import CloneCancelledError, CloneError, CloneTimeoutError
from .models import RepositoryProvider

GIT_BINARY = "git"
HG_BINARY = "hg"

# How often the wait loop checks the cancel event
POLL_INTERVAL = 0.1
MAX_STDERR_LENGTH = 2_000


def build_clone_command(provider: RepositoryProvider, url: str, directory: Path) -> list[str]:
    """Argument list for a minimal-history clone of url into directory."""
    if provider is RepositoryProvider.GIT:
        return [
            GIT_BINARY, "clone", url, str(directory),
            "--quiet", "--no-tags", "--single-branch", "--depth=1",
        ]
    if provider is RepositoryProvider.MERCURIAL:
        return [HG_BINARY, "clone", url, str(directory), "--stream"]
    raise ValueError(f"Unsupported provider: {provider}")


def clone_repository(
    url: str,
    directory: Path,
    timeout: float,
    provider: RepositoryProvider = RepositoryProvider.GIT,
    cancel: threading.Event | None = None,
) -> None:
    """Clone url into directory, killing the client if it overruns timeout.

    Raises CloneTimeoutError on deadline, CloneCancelledError when cancel is
    set, and CloneError for a nonzero exit. The directory is left as is.
    """
    cmd = build_clone_command(provider, url, Path(directory))
    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            env=env,
            start_new_session=os.name == "posix",
        )
    except OSError as e:
        raise CloneError(f"Could not run {cmd[0]}: {e}") from e

    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            _terminate(proc)
            raise CloneTimeoutError(f"Clone of {url} timed out after {timeout}s")
        if cancel is not None and cancel.is_set():
            _terminate(proc)
            raise CloneCancelledError(f"Clone of {url} was cancelled")
        try:
            _, stderr = proc.communicate(timeout=min(POLL_INTERVAL, remaining))
            break
        except subprocess.TimeoutExpired:
            continue

    if proc.returncode != 0:
        message = (stderr or b"").decode("utf-8", errors="replace").strip()[:MAX_STDERR_LENGTH]
        raise CloneError(
            f"{cmd[0]} clone of {url} exited with {proc.returncode}",
            returncode=proc.returncode,
            stderr=message,
        )


def clone_git_repository(url: str, directory: Path, timeout: float, cancel=None) -> None:
    clone_repository(url, directory, timeout, RepositoryProvider.GIT, cancel)


def clone_mercurial_repository(url: str, directory: Path, timeout: float, cancel=None) -> None:
    clone_repository(url, directory, timeout, RepositoryProvider.MERCURIAL, cancel)


def _terminate(proc: subprocess.Popen) -> None:
    """Kill the client and any helpers it spawned, then reap it."""
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        proc.kill()
    proc.communicate()
