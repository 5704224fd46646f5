"""Discover freshly pushed repositories from GitHub's public events feed."""

import random
from collections.abc import Sequence
from dataclasses import dataclass

from .client import ApiClient
from .models import Repository, RepositoryProvider
from .tokens import format_token, get_random_token

GITHUB_BASE = "https://github.com"
REPOSITORY_EVENT_TYPES = {"PushEvent", "CreateEvent"}


@dataclass
class EventRepo:
    name: str
    url: str | None = None


@dataclass
class GitHubEvent:
    """The subset of a public event needed to find its repository."""

    type: str
    repo: EventRepo
    id: str | None = None


def fetch_github_repositories(
    client: ApiClient,
    url: str,
    tokens: Sequence[str],
    rng: random.Random | None = None,
) -> list[Repository]:
    """Fetch one events page with a random token and return its repositories.

    Fetch errors (rate limiting, server errors, ...) propagate unchanged so
    the caller can back off or rotate credentials.
    """
    token = get_random_token(tokens, rng)
    events = client.fetch(url, auth=format_token(token), target=list[GitHubEvent])
    return repositories_from_events(events)


def repositories_from_events(events: list[GitHubEvent]) -> list[Repository]:
    seen = set()
    repositories = []
    for event in events:
        if event.type not in REPOSITORY_EVENT_TYPES or event.repo.name in seen:
            continue
        seen.add(event.repo.name)
        repositories.append(
            Repository(
                url=f"{GITHUB_BASE}/{event.repo.name}",
                name=event.repo.name,
                provider=RepositoryProvider.GIT,
            )
        )
    return repositories
