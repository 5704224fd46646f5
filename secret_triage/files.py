"""Candidate file enumeration and filesystem helpers."""

import hashlib
import os
import shutil
import stat
from collections.abc import Iterator
from pathlib import Path

from .models import Blacklists, CandidateFile, SkippedEntry, get_extension


def is_blacklisted(relative_path: str, blacklists: Blacklists) -> bool:
    """Whether a root-relative path matches an extension or path rule.

    The path is matched as "/" + relative path, so indicators anchored with a
    leading "/" also match at the top of the checkout.
    """
    normalized = relative_path.replace(os.sep, "/").replace("\\", "/").lower()
    if not normalized.startswith("/"):
        normalized = f"/{normalized}"
    extension = get_extension(normalized)

    if extension and extension in blacklists.extensions:
        return True

    return any(indicator in normalized for indicator in blacklists.paths)


def iter_checkable_files(
    root: Path,
    maximum_file_size: int,
    blacklists: Blacklists,
    skipped: list[SkippedEntry] | None = None,
) -> Iterator[CandidateFile]:
    """Walk root and yield files worth scanning.

    maximum_file_size is in kilobytes. Entries that cannot be inspected are
    appended to skipped (when given) and the walk carries on.
    """
    root = Path(root).absolute()
    maximum_bytes = maximum_file_size * 1024

    def on_error(err: OSError):
        if skipped is not None:
            skipped.append(SkippedEntry(Path(err.filename or root), _reason(err)))

    for dirpath, _, filenames in os.walk(root, onerror=on_error):
        for name in filenames:
            path = Path(dirpath) / name
            try:
                info = path.lstat()
            except OSError as err:
                on_error(err)
                continue

            # Never follow links out of an untrusted checkout
            if not stat.S_ISREG(info.st_mode):
                continue
            if info.st_size > maximum_bytes:
                continue
            if is_blacklisted(path.relative_to(root).as_posix(), blacklists):
                continue

            yield CandidateFile.from_path(path, info.st_size)


def get_checkable_files(
    root: Path,
    maximum_file_size: int,
    blacklists: Blacklists,
    skipped: list[SkippedEntry] | None = None,
) -> list[CandidateFile]:
    return list(iter_checkable_files(root, maximum_file_size, blacklists, skipped))


def _reason(err: OSError) -> str:
    return err.strerror or type(err).__name__


def get_temp_dir(prefix: Path | str, suffix: str) -> Path:
    """Return prefix/suffix as a fresh, empty directory."""
    path = Path(prefix) / suffix
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def path_exists(path: Path | str) -> bool:
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def get_directory_size(path: Path | str) -> int:
    """Total size in bytes of regular files under path. Errors propagate."""

    def raise_error(err: OSError):
        raise err

    size = 0
    for dirpath, _, filenames in os.walk(path, onerror=raise_error):
        for name in filenames:
            info = os.lstat(os.path.join(dirpath, name))
            if stat.S_ISREG(info.st_mode):
                size += info.st_size
    return size


def get_hash(value: str) -> str:
    """SHA-1 hex digest, used for stable directory and ledger keys."""
    return hashlib.sha1(value.encode()).hexdigest()


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural
