"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that matching entry points depend
on: the filesystem and the providers that own referrals, homes and threads.
They enable isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd

    from .domain.placement import Home, Referral


@runtime_checkable
class ReferralProvider(Protocol):
    """Source of referrals, keyed by referral id."""

    def get_referral(self, referral_id: str) -> Referral | None:
        """Return the referral, or None when the id is unknown."""
        ...


@runtime_checkable
class HomeProvider(Protocol):
    """Source of the full candidate pool of homes."""

    def list_homes(self) -> Sequence[Home]:
        """Return every home, in a stable order."""
        ...


@runtime_checkable
class ThreadIndexProvider(Protocol):
    """Source of existing negotiation threads for a referral."""

    def thread_index(self, referral_id: str) -> dict[str, str]:
        """Return home id -> thread id for homes already contacted about a referral."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading inputs and writing reports."""

    def read_csv(self, path: Path) -> pd.DataFrame:
        """Read CSV file into DataFrame."""
        ...

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        """Write DataFrame to CSV file."""
        ...

    def read_json(self, path: Path) -> dict[str, object]:
        """Read JSON file."""
        ...

    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        """Write JSON file."""
        ...

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def write_text(self, content: str, path: Path) -> None:
        """Write text file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    def mkdir(self, path: Path, parents: bool = True) -> None:
        """Create directory."""
        ...
