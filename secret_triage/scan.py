"""Triage a single repository: clone it, enumerate candidates, score them."""

import threading

from .clone import clone_repository
from .entropy import get_entropy, get_max_line_entropy
from .errors import RepositoryTooLargeError
from .files import get_checkable_files, get_directory_size, get_hash, get_temp_dir
from .models import Repository, ScanResult, ScoredFile, SkippedEntry
from .settings import Settings, get_settings


def scan_repository(
    repository: Repository,
    settings: Settings | None = None,
    cancel: threading.Event | None = None,
) -> ScanResult:
    """Clone repository into its own temp dir and score every candidate file.

    Clone and size errors propagate. Files that cannot be read are reported
    in ScanResult.skipped rather than failing the scan.
    """
    settings = settings or get_settings()
    directory = get_temp_dir(settings.temp_dir, get_hash(repository.url))

    clone_repository(
        repository.url,
        directory,
        settings.clone_timeout,
        provider=repository.provider,
        cancel=cancel,
    )

    size = get_directory_size(directory)
    limit = settings.maximum_repository_size * 1024
    if size > limit:
        raise RepositoryTooLargeError(repository.url, size, limit)

    skipped: list[SkippedEntry] = []
    candidates = get_checkable_files(directory, settings.maximum_file_size, settings.blacklists, skipped)

    scored = []
    for candidate in candidates:
        try:
            contents = candidate.read_bytes()
        except OSError as e:
            skipped.append(SkippedEntry(candidate.path, e.strerror or type(e).__name__))
            continue
        scored.append(
            ScoredFile(
                file=candidate,
                entropy=get_entropy(contents),
                max_line_entropy=get_max_line_entropy(contents),
            )
        )

    scored.sort(key=lambda f: f.entropy, reverse=True)
    return ScanResult(
        repository=repository,
        directory=directory,
        size_bytes=size,
        files=scored,
        skipped=skipped,
    )
