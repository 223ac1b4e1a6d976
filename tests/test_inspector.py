from __future__ import annotations

from livetrack.host import FrameHost
from livetrack.inspector import debug_memory_map, inspect_memory_map
from livetrack.store import initialize_memory_map, track_translation


def test_report_is_none_without_store(caplog) -> None:
    with caplog.at_level("INFO", logger="livetrack.inspector"):
        assert debug_memory_map() is None
    assert "Memory map not initialized" in caplog.text


def test_report_previews_first_ten_entries(embedded_host: FrameHost) -> None:
    initialize_memory_map()
    long_value = "x" * 80
    track_translation(long_value, "long.key")
    track_translation(long_value, "another.key")
    for index in range(11):
        track_translation(f"value {index}", f"key.{index}")

    report = inspect_memory_map()

    assert report is not None
    assert report.total == 12
    assert len(report.rows) == 10
    assert report.remaining == 2
    assert report.rows[0].value == "x" * 50
    assert report.rows[0].keys == "another.key, long.key"
    assert report.rows[1].value == "value 0"


def test_debug_dump_logs_and_does_not_mutate(embedded_host: FrameHost, caplog) -> None:
    store = initialize_memory_map()
    for index in range(12):
        track_translation(f"value {index}", f"key.{index}")
    before = [(value, set(entry.ids), entry.metadata.tracked_at) for value, entry in store.items()]

    with caplog.at_level("INFO", logger="livetrack.inspector"):
        report = debug_memory_map()

    after = [(value, set(entry.ids), entry.metadata.tracked_at) for value, entry in store.items()]
    assert before == after
    assert "Total entries: 12" in caplog.text
    assert "... and 2 more entries" in caplog.text
    assert report.to_dict()["remaining"] == 2


def test_small_store_has_no_remaining_line(embedded_host: FrameHost) -> None:
    initialize_memory_map()
    track_translation("Hello", "greeting")

    report = inspect_memory_map()

    assert report.remaining == 0
    assert report.as_lines() == ["Memory map contents:", "Total entries: 1", "  'Hello' -> greeting"]
