"""Unit tests for history storage and statistics."""

import json
from datetime import datetime, timezone

import matplotlib
matplotlib.use("Agg")

import pytest
from sudoku_game.history import (
    History,
    HistoryEntry,
    JsonHistoryStore,
    MemoryHistoryStore,
    summarize,
    format_elapsed,
)
from sudoku_game.history.visualizer import HistoryVisualizer


def make_entry(difficulty="facil", time=100, hints_used=0, puzzle_hash="0" * 81):
    return HistoryEntry.create(difficulty, time, hints_used, puzzle_hash)


class TestHistoryEntry:
    """Tests for HistoryEntry."""

    def test_record_fields(self):
        """Stored records use exactly the documented keys."""
        date = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)
        entry = HistoryEntry.create("medio", 321, 2, "1" * 81, date=date)
        record = entry.to_dict()

        assert set(record) == {"id", "difficulty", "time", "hintsUsed", "date", "puzzleHash"}
        assert record["difficulty"] == "medio"
        assert record["time"] == 321
        assert record["hintsUsed"] == 2
        assert record["date"] == "2026-03-01T12:30:00+00:00"
        assert record["puzzleHash"] == "1" * 81

    def test_from_dict(self):
        entry = make_entry(time=42, hints_used=3)
        assert HistoryEntry.from_dict(entry.to_dict()) == entry

    def test_from_dict_rejects_missing_field(self):
        record = make_entry().to_dict()
        del record["puzzleHash"]
        with pytest.raises(KeyError):
            HistoryEntry.from_dict(record)

    def test_ids_are_unique(self):
        assert make_entry().id != make_entry().id


class TestHistory:
    """Tests for History."""

    def test_starts_empty(self):
        history = History()
        assert len(history) == 0
        assert history.entries == []

    def test_record_newest_first(self):
        history = History()
        first = make_entry(time=10)
        second = make_entry(time=20)
        history.record(first)
        history.record(second)
        assert history.entries == [second, first]

    def test_capped_at_fifty(self):
        """Only the 50 most recent games are kept."""
        history = History()
        entries = [make_entry(time=i) for i in range(55)]
        for entry in entries:
            history.record(entry)

        assert len(history) == 50
        assert history.entries[0] == entries[-1]
        assert history.entries[-1] == entries[5]

    def test_record_persists(self):
        store = MemoryHistoryStore()
        history = History(store)
        entry = make_entry()
        history.record(entry)

        reloaded = History(store)
        assert reloaded.entries == [entry]

    def test_is_puzzle_used(self):
        history = History()
        history.record(make_entry(puzzle_hash="5" * 81))
        assert history.is_puzzle_used("5" * 81)
        assert not history.is_puzzle_used("6" * 81)

    def test_clear(self):
        store = MemoryHistoryStore()
        history = History(store)
        history.record(make_entry())
        history.clear()
        assert len(history) == 0
        assert store.load() == []

    def test_skips_malformed_records(self):
        good = make_entry().to_dict()
        store = MemoryHistoryStore([good, {"id": "x"}, {"time": "abc"}])
        history = History(store)
        assert [e.to_dict() for e in history] == [good]


class TestJsonHistoryStore:
    """Tests for the JSON file backend."""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonHistoryStore(str(tmp_path / "nope.json")).load() == []

    def test_roundtrip_through_history(self, tmp_path):
        path = tmp_path / "sub" / "history.json"
        history = History(JsonHistoryStore(str(path)))
        entry = make_entry(difficulty="expert", time=900)
        history.record(entry)

        data = json.loads(path.read_text())
        assert data == [entry.to_dict()]
        assert History(JsonHistoryStore(str(path))).entries == [entry]

    def test_unparseable_file_is_empty(self, tmp_path):
        """Corrupt data counts as no history rather than an error."""
        path = tmp_path / "history.json"
        path.write_text("{not json")
        assert JsonHistoryStore(str(path)).load() == []
        assert len(History(JsonHistoryStore(str(path)))) == 0

    def test_non_list_is_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('{"id": 1}')
        assert JsonHistoryStore(str(path)).load() == []

    @pytest.mark.parametrize("number", ["Infinity", "-Infinity", "1e400", "NaN"])
    def test_non_finite_numbers_skipped(self, tmp_path, number):
        """Records whose time cannot be an integer are dropped, the rest kept."""
        good = make_entry().to_dict()
        bad = dict(good, id="bad")
        text = json.dumps([bad, good]).replace('"time": 100', f'"time": {number}', 1)
        path = tmp_path / "history.json"
        path.write_text(text)

        history = History(JsonHistoryStore(str(path)))
        assert [e.id for e in history] == [good["id"]]

    def test_unwritable_path_does_not_raise(self, tmp_path):
        """A failed write keeps the in-memory history."""
        history = History(JsonHistoryStore(str(tmp_path)))
        entry = make_entry()
        history.record(entry)
        assert history.entries == [entry]


class TestStats:
    """Tests for summaries and formatting."""

    def test_summarize(self):
        entries = [
            make_entry("facil", 100, 1),
            make_entry("facil", 300, 3),
            make_entry("expert", 1000, 0),
        ]
        summary = summarize(entries)

        assert list(summary) == ["facil", "expert"]
        assert summary["facil"]["games"] == 2
        assert summary["facil"]["best_time"] == 100
        assert summary["facil"]["avg_time"] == pytest.approx(200.0)
        assert summary["facil"]["avg_hints_used"] == pytest.approx(2.0)
        assert summary["expert"]["best_time"] == 1000

    def test_summarize_empty(self):
        assert summarize([]) == {}

    @pytest.mark.parametrize("seconds, expected", [
        (0, "00:00"),
        (59, "00:59"),
        (61, "01:01"),
        (3599, "59:59"),
        (3661, "1:01:01"),
        (-5, "00:00"),
    ])
    def test_format_elapsed(self, seconds, expected):
        assert format_elapsed(seconds) == expected


class TestHistoryVisualizer:
    """Tests for history charts."""

    def test_generate_all(self, tmp_path):
        entries = [
            make_entry("tutorial", 60, 2),
            make_entry("medio", 400, 1),
            make_entry("medio", 350, 0),
        ]
        charts = HistoryVisualizer(entries, str(tmp_path)).generate_all()

        assert len(charts) == 3
        for chart in charts:
            assert (tmp_path / chart.split("/")[-1]).stat().st_size > 0

    def test_no_history_no_charts(self, tmp_path):
        assert HistoryVisualizer([], str(tmp_path)).generate_all() == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
