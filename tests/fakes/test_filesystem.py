"""Tests for the in-memory filesystem fake."""

from pathlib import Path

import pandas as pd
import pytest

from tests.fakes import InMemoryFileSystem
from tests.support.errors import FakeFileNotFoundError, FakeFileTypeError


class TestInMemoryFileSystem:
    """Validate the fake behaves like the local filesystem for tests."""

    def test_write_csv_stores_a_copy(self) -> None:
        fs = InMemoryFileSystem()
        path = Path("out/matches.csv")
        df = pd.DataFrame({"home_id": ["oakwood"]})

        fs.write_csv(df, path)
        df.loc[0, "home_id"] = "maple"

        assert fs.read_csv(path)["home_id"].tolist() == ["oakwood"]

    def test_read_missing_file_raises(self) -> None:
        fs = InMemoryFileSystem()

        with pytest.raises(FakeFileNotFoundError):
            fs.read_json(Path("missing.json"))

    def test_read_with_wrong_type_raises(self) -> None:
        fs = InMemoryFileSystem()
        path = Path("notes.txt")
        fs.write_text("hello", path)

        with pytest.raises(FakeFileTypeError):
            fs.read_csv(path)
        with pytest.raises(FakeFileTypeError):
            fs.read_json(path)

    def test_exists_tracks_writes(self) -> None:
        fs = InMemoryFileSystem()
        path = Path("data/placements/snapshot.json")

        assert fs.exists(path) is False
        fs.write_json({"schema_version": 1}, path)

        assert fs.exists(path) is True
        assert fs.read_json(path) == {"schema_version": 1}
