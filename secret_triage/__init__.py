"""Acquire remote repositories and triage their files for secret scanning.

Clones with a hard deadline, enumerates files past a blacklist and size
ceiling, and scores them by Shannon entropy. Includes a classified,
single-shot client for rate-limited hosting APIs with token rotation.
"""

from .cli import main
from .client import ApiClient, fetch_url_as, get_api_client
from .clone import clone_repository
from .entropy import get_entropy
from .files import get_checkable_files, iter_checkable_files
from .models import Blacklists, CandidateFile, Repository, RepositoryProvider
from .tokens import get_random_token

__all__ = [
    "main",
    "ApiClient",
    "fetch_url_as",
    "get_api_client",
    "clone_repository",
    "get_entropy",
    "get_checkable_files",
    "iter_checkable_files",
    "Blacklists",
    "CandidateFile",
    "Repository",
    "RepositoryProvider",
    "get_random_token",
]

if __name__ == "__main__":
    main()
