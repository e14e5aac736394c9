"""
Test suite for the snapshot writer.

Tests cover:
- Line format
- Open, write, close lifecycle
- Error handling
"""

import pytest
from plummer import (PlummerSystem, ParticleState, SnapshotWriter, OutputError,
                     format_snapshot)


@pytest.fixture
def state():
    return ParticleState(PlummerSystem(1.0, 1.0), [1.0, 2.0, 3.0], [4.0, 5.0, 6.0], 0.5)


class TestFormat:
    """Test snapshot line formatting."""

    def test_field_order(self, state):
        assert format_snapshot(state) == "0.5 1.0 2.0 3.0 4.0 5.0 6.0"

    def test_full_precision(self):
        s = ParticleState(PlummerSystem(1.0, 1.0), [0.1 + 0.2, 0.0, 0.0], [0.0, 0.0, 0.0])
        assert format_snapshot(s).split()[1] == "0.30000000000000004"

    def test_non_finite(self):
        s = ParticleState(PlummerSystem(1.0, 1.0), [float('nan'), float('inf'), 0.0],
                          [0.0, 0.0, 0.0])
        assert format_snapshot(s).split()[1:3] == ["nan", "inf"]


class TestWriter:
    """Test SnapshotWriter lifecycle."""

    def test_context_manager(self, tmp_path, state):
        path = tmp_path / "out.txt"
        with SnapshotWriter(path) as writer:
            assert writer.is_open
            writer.write(state)
            writer.write(state)
            assert writer.count == 2
        assert not writer.is_open
        assert path.read_text() == "0.5 1.0 2.0 3.0 4.0 5.0 6.0\n" * 2

    def test_written_immediately(self, tmp_path, state):
        path = tmp_path / "out.txt"
        with SnapshotWriter(path) as writer:
            writer.write(state)
            assert path.read_text().count("\n") == 1

    def test_closed_on_error(self, tmp_path, state):
        path = tmp_path / "out.txt"
        writer = SnapshotWriter(path)
        with pytest.raises(RuntimeError):
            with writer:
                writer.write(state)
                raise RuntimeError("boom")
        assert not writer.is_open
        assert path.read_text().count("\n") == 1

    def test_write_when_closed(self, tmp_path, state):
        writer = SnapshotWriter(tmp_path / "out.txt")
        with pytest.raises(OutputError, match="not open"):
            writer.write(state)

    def test_open_failure(self, tmp_path):
        writer = SnapshotWriter(tmp_path / "no" / "such" / "dir.txt")
        with pytest.raises(OutputError):
            writer.open()
        assert not writer.is_open

    def test_close_twice(self, tmp_path):
        writer = SnapshotWriter(tmp_path / "out.txt").open()
        writer.close()
        writer.close()
        assert not writer.is_open

    def test_repr(self, tmp_path):
        assert "closed" in repr(SnapshotWriter(tmp_path / "out.txt"))
