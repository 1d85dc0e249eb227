from datetime import datetime, timedelta

import pytest

from zpool_health.zfs_operations.core.entities.scan_state import ScanFlag, ScanKind
from zpool_health.zfs_operations.core.exceptions.zfs_exceptions import ScanDateParseError
from zpool_health.zfs_operations.services.scan_interpreter import (
    ScanInterpreter,
    elapsed_days,
    interpret,
    parse_scan_date,
)

SCRUB_DATE = datetime(2024, 1, 1, 0, 0, 0)


class TestScanInterpreter:
    def test_scrub_completed_clean(self):
        state = interpret(
            "scrub repaired 0B in 0 days 02:00:00 with 0 errors on Mon Jan 01 00:00:00 2024",
            now=SCRUB_DATE + timedelta(days=3),
        )
        assert state.kind == ScanKind.SCRUB_COMPLETED
        assert state.elapsed_days == 3
        assert state.flags == ()

    def test_scrub_completed_with_repairs_and_errors(self):
        state = interpret(
            "scrub repaired 12K in 00:10:00 with 4 errors on Mon Jan  1 00:00:00 2024",
            now=SCRUB_DATE + timedelta(days=1),
        )
        assert state.flags == (ScanFlag.REPAIRED, ScanFlag.ERRORS)

    def test_partial_days_truncate(self):
        state = interpret(
            "scrub repaired 0B in 00:01:00 with 0 errors on Mon Jan  1 00:00:00 2024",
            now=SCRUB_DATE + timedelta(days=2, hours=23, minutes=59),
        )
        assert state.elapsed_days == 2

    def test_resilver_completed(self):
        clean = interpret("resilvered 10G in 01:00:00 with 0 errors on Mon Jan  1 00:00:00 2024")
        dirty = interpret("resilvered 10G in 01:00:00 with 2 errors on Mon Jan  1 00:00:00 2024")
        assert clean.kind == ScanKind.RESILVER_COMPLETED
        assert clean.elapsed_days is None
        assert clean.flags == ()
        assert dirty.flags == (ScanFlag.RSVLR_ERRORS,)

    def test_scrub_in_progress(self):
        state = interpret(
            "scrub in progress since Mon Jan  1 00:00:00 2024; 1.00T scanned at 1G/s",
            now=SCRUB_DATE + timedelta(days=5),
        )
        assert state.kind == ScanKind.SCRUB_IN_PROGRESS
        assert state.elapsed_days == 5
        assert state.flags == ()

    def test_resilver_in_progress(self):
        state = interpret("resilver in progress since Mon Jan 01 00:00:00 2024")
        assert state.kind == ScanKind.RESILVER_IN_PROGRESS
        assert state.flags == (ScanFlag.RSVLR,)
        assert state.age_label() == "S=?d"

    @pytest.mark.parametrize("text", ["none requested", "", "scrub canceled on Mon Jan  1 2024"])
    def test_unrecognised_text(self, text):
        state = interpret(text)
        assert state.kind == ScanKind.NONE
        assert not state.has_age
        assert state.flags == ()

    def test_bad_timestamp_is_fatal(self):
        with pytest.raises(ScanDateParseError) as exc_info:
            interpret("scrub repaired 0B in 00:01:00 with 0 errors on yesterday")
        assert str(exc_info.value) == "failed to parse scan date yesterday"

    def test_custom_rules(self):
        assert ScanInterpreter(rules=[]).interpret(
            "resilver in progress since Mon Jan  1 00:00:00 2024"
        ).kind == ScanKind.NONE


def test_parse_scan_date_tolerates_padded_day():
    assert parse_scan_date("Mon Jan  1 00:00:00 2024") == SCRUB_DATE


def test_elapsed_days():
    assert elapsed_days(SCRUB_DATE, SCRUB_DATE + timedelta(days=10, hours=1)) == 10
