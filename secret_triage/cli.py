"""CLI commands for repository triage."""

import argparse
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(
        description="Acquire repositories and triage their files for secret scanning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(__file__).parent.parent / "results",
        help="Output directory for results",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # entropy subcommand
    entropy_parser = subparsers.add_parser(
        "entropy",
        help="Print the Shannon entropy of a string or file",
    )
    entropy_parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="String to score",
    )
    entropy_parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Score the contents of this file instead",
    )

    # scan subcommand
    scan_parser = subparsers.add_parser(
        "scan",
        help="Clone a repository and list candidate files by entropy",
    )
    scan_parser.add_argument(
        "url",
        help="Repository URL",
    )
    scan_parser.add_argument(
        "--hg",
        action="store_true",
        help="Clone with mercurial instead of git",
    )
    scan_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Entropy threshold for reporting (default: ENTROPY_THRESHOLD setting)",
    )

    # poll subcommand
    poll_parser = subparsers.add_parser(
        "poll",
        help="Poll GitHub public events for new repositories",
    )
    poll_parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Database path (default: results/repositories.db)",
    )
    poll_parser.add_argument(
        "--scan",
        action="store_true",
        help="Scan each new repository and record the outcome",
    )

    args = parser.parse_args()

    if args.command == "entropy":
        from .entropy import get_entropy, get_max_line_entropy

        if args.file is not None:
            data = args.file.read_bytes()
            print(f"entropy: {get_entropy(data):.4f}")
            print(f"max line entropy: {get_max_line_entropy(data):.4f}")
        elif args.text is not None:
            print(f"{get_entropy(args.text):.4f}")
        else:
            entropy_parser.error("provide TEXT or --file")
    elif args.command == "scan":
        from .models import Repository, RepositoryProvider
        from .settings import get_settings

        settings = get_settings()
        provider = RepositoryProvider.MERCURIAL if args.hg else RepositoryProvider.GIT
        repository = Repository(url=args.url, name=args.url.rstrip("/").rsplit("/", 1)[-1], provider=provider)
        threshold = args.threshold if args.threshold is not None else settings.entropy_threshold
        sys.exit(_scan_and_report(repository, settings, threshold))
    elif args.command == "poll":
        sys.exit(_poll(args.db or (args.output_dir / "repositories.db"), args.scan))
    else:
        parser.print_help()


def _scan_and_report(repository, settings, threshold, db_path=None) -> int:
    from . import db
    from .errors import CloneError, CloneTimeoutError, RepositoryTooLargeError
    from .files import pluralize
    from .scan import scan_repository

    print(f"Cloning {repository.url}", flush=True)
    try:
        result = scan_repository(repository, settings)
    except CloneTimeoutError as e:
        print(f"  timeout: {e}", flush=True)
        if db_path:
            db.mark_processed(db_path, repository, "timeout")
        return 1
    except CloneError as e:
        detail = f" ({e.stderr})" if e.stderr else ""
        print(f"  clone failed: {e}{detail}", flush=True)
        if db_path:
            db.mark_processed(db_path, repository, "error")
        return 1
    except RepositoryTooLargeError as e:
        print(f"  skipped: {e}", flush=True)
        if db_path:
            db.mark_processed(db_path, repository, "too_large", e.size)
        return 1

    count = len(result.files)
    print(
        f"  {count} candidate {pluralize(count, 'file', 'files')}, "
        f"{len(result.skipped)} skipped, {result.size_bytes:,} bytes",
        flush=True,
    )
    for scored in result.high_entropy_files(threshold):
        rel = scored.file.path.relative_to(result.directory)
        print(f"    {scored.entropy:.2f} / {scored.max_line_entropy:.2f}  {rel}", flush=True)

    if db_path:
        db.mark_processed(db_path, repository, "scanned", result.size_bytes)
    return 0


def _poll(db_path: Path, scan: bool) -> int:
    from . import db
    from .client import get_api_client
    from .errors import EmptyTokenPoolError, FetchError, RateLimitedError, ServerError
    from .github_events import fetch_github_repositories
    from .settings import get_settings

    settings = get_settings()
    db.init_db(db_path)

    try:
        repositories = fetch_github_repositories(
            get_api_client(), settings.github_events_url, settings.github_tokens
        )
    except EmptyTokenPoolError:
        print("GITHUB_TOKENS is not set", file=sys.stderr, flush=True)
        return 2
    except RateLimitedError as e:
        wait = f", retry after {e.retry_after:g}s" if e.retry_after is not None else ""
        print(f"Rate limited{wait}", file=sys.stderr, flush=True)
        return 1
    except ServerError:
        print("GitHub returned 500, try again later", file=sys.stderr, flush=True)
        return 1
    except FetchError as e:
        print(f"Fetch failed: {e}", file=sys.stderr, flush=True)
        return 1

    new = db.filter_unprocessed(db_path, repositories)
    print(f"{len(repositories)} repositories, {len(new)} new", flush=True)

    failures = 0
    for repository in new:
        print(repository.url, flush=True)
        if scan and _scan_and_report(repository, settings, settings.entropy_threshold, db_path):
            failures += 1

    if scan:
        print(f"\nDone: {len(new) - failures} scanned, {failures} failed", flush=True)
    return 0


if __name__ == "__main__":
    main()
