"""Credential rotation across a pool of API tokens."""

import random
from collections.abc import Sequence

from .errors import EmptyTokenPoolError


def get_random_token(tokens: Sequence[str], rng: random.Random | None = None) -> str:
    """Pick one token uniformly at random.

    Pass rng for deterministic selection; otherwise the module-level
    random source is used. No state is kept between calls.
    """
    if not tokens:
        raise EmptyTokenPoolError("credential pool is empty")
    return (rng or random).choice(tokens)


def format_token(token: str) -> str:
    """Build an Authorization header value for a GitHub token."""
    return f"token {token}"
