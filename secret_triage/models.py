"""Data models shared across acquisition, enumeration and scoring."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RepositoryProvider(Enum):
    GIT = "git"
    MERCURIAL = "hg"


@dataclass(frozen=True)
class Repository:
    """A remote repository to acquire."""

    url: str
    name: str
    provider: RepositoryProvider = RepositoryProvider.GIT


@dataclass(frozen=True)
class Blacklists:
    """Exclusion rules for file enumeration.

    Extensions are exact, case-insensitive tokens stored as ".ext".
    Paths are case-insensitive substrings of the root-relative path,
    which always starts with "/".
    """

    extensions: tuple[str, ...] = ()
    paths: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, "extensions", tuple(_normalize_extension(e) for e in self.extensions if e.strip())
        )
        object.__setattr__(
            self, "paths", tuple(p.replace("\\", "/").lower() for p in self.paths if p)
        )

    @classmethod
    def from_lists(cls, extensions=(), paths=()) -> "Blacklists":
        return cls(extensions=tuple(extensions), paths=tuple(paths))


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def get_extension(path: str) -> str:
    """Lowercase text from the last "." of the basename, dotfiles included.

    ".env" gives ".env", "a.tar.gz" gives ".gz", "Makefile" gives "".
    """
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:].lower() if dot != -1 else ""


@dataclass(frozen=True)
class CandidateFile:
    """A file that survived blacklist and size filtering."""

    path: Path
    size: int
    extension: str

    @classmethod
    def from_path(cls, path: Path, size: int) -> "CandidateFile":
        return cls(path=path, size=size, extension=get_extension(path.name))

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class SkippedEntry:
    """An entry the enumerator could not inspect, with the reason."""

    path: Path
    reason: str


@dataclass(frozen=True)
class ScoredFile:
    file: CandidateFile
    entropy: float
    max_line_entropy: float


@dataclass
class ScanResult:
    """Outcome of triaging one repository."""

    repository: Repository
    directory: Path
    size_bytes: int
    files: list[ScoredFile] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)

    def high_entropy_files(self, threshold: float) -> list[ScoredFile]:
        """Files whose whole-file or best line entropy reaches threshold."""
        return [
            f for f in self.files
            if f.entropy >= threshold or f.max_line_entropy >= threshold
        ]
