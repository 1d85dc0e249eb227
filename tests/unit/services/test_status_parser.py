import pytest

from zpool_health.zfs_operations.core.entities.status_report import SparesGroup
from zpool_health.zfs_operations.core.exceptions.zfs_exceptions import MalformedReportError
from zpool_health.zfs_operations.services.status_parser import StatusParser, parse
from tests.fixtures.zpool_data import (
    DEEP_NESTING_STATUS,
    DEGRADED_STATUS,
    HEALTHY_STATUS,
    NO_SCAN_STATUS,
)


class TestStatusParser:
    """Status report parsing."""

    def test_scalar_categories(self):
        report = parse(HEALTHY_STATUS)
        assert report.pool == "tank"
        assert report.get("state") == "ONLINE"
        assert report.scan.startswith("scrub repaired 0B in 00:01:23")
        assert report.errors == "No known data errors"
        assert not report.has_category("status")

    def test_config_tree(self):
        report = parse(HEALTHY_STATUS)
        assert list(report.config) == ["tank"]
        tank = report.config["tank"]
        assert tank.state == "ONLINE"
        assert (tank.read_err, tank.write_err, tank.cksum_err) == (0, 0, 0)
        mirror = tank.children["mirror-0"]
        assert list(mirror.children) == ["sda", "sdb"]
        assert mirror.children["sda"].children == {}

    def test_continuation_lines_are_joined(self):
        report = parse(DEGRADED_STATUS)
        assert report.status == (
            "One or more devices has been removed by the administrator.; "
            "Sufficient replicas exist for the pool to continue functioning."
        )
        assert report.scan == (
            "resilver in progress since Mon Jan  1 00:00:00 2024; "
            "1.00T scanned at 100M/s, 500G issued at 50M/s, 2.00T total"
        )

    def test_counters(self):
        raidz = parse(DEGRADED_STATUS).config["data"].children["raidz1-0"]
        assert raidz.children["sdc"].cksum_err == 3
        assert raidz.children["sde"].read_err == 1
        assert raidz.children["sdd"].state == "REMOVED"

    def test_spares_carry_state_only(self):
        report = parse(DEGRADED_STATUS)
        spares = report.spares
        assert isinstance(spares, SparesGroup)
        assert spares.children["sdf"].state == "INUSE"
        assert spares.children["sdf"].cksum_err is None
        assert spares.children["sdg"].state == "AVAIL"

    def test_missing_scan(self):
        assert parse(NO_SCAN_STATUS).scan is None

    def test_accepts_line_iterable(self):
        report = StatusParser().parse(HEALTHY_STATUS.splitlines())
        assert report.pool == "tank"

    def test_deeper_nesting_is_malformed(self):
        with pytest.raises(MalformedReportError) as exc_info:
            parse(DEEP_NESTING_STATUS)
        assert "unknown zpool status config line" in str(exc_info.value)

    def test_child_without_parent_is_malformed(self):
        with pytest.raises(MalformedReportError):
            parse("config:\n\t  sda  ONLINE 0 0 0\n")

    def test_lines_before_first_category_ignored(self, mock_logger):
        report = StatusParser(mock_logger).parse("garbage line\n  pool: tank\n")
        assert report.pool == "tank"
        mock_logger.debug.assert_called_once()

    def test_non_numeric_counter_is_unknown(self, mock_logger):
        report = StatusParser(mock_logger).parse("config:\n\ttank  ONLINE  x 0 0\n")
        assert report.config["tank"].read_err is None
        mock_logger.warning.assert_called_once()

    def test_empty_category_value(self):
        report = parse("status:\nerrors: No known data errors\n")
        assert report.status == ""
        assert report.has_category("status")

    def test_top_level_without_counters(self):
        report = parse("config:\n\tlogs\n\t  nvme0  ONLINE 0 0 0\n")
        logs = report.config["logs"]
        assert logs.state is None
        assert logs.children["nvme0"].state == "ONLINE"

    @pytest.mark.parametrize("line", [
        "\t/dev/sda  ONLINE 0 0 0",
        "\t@x ONLINE",
        "\t  (sdb)  ONLINE 0 0 0",
    ])
    def test_device_name_charset_enforced(self, line):
        with pytest.raises(MalformedReportError):
            parse(f"config:\n\ttank  ONLINE 0 0 0\n{line}\n")

    def test_device_names_with_separators(self):
        report = parse(
            "config:\n"
            "\ttank                    ONLINE 0 0 0\n"
            "\t  draid2:8d:10c:1s-0    ONLINE 0 0 0\n"
            "\t    wwn-0x5000.c500_a   ONLINE 0 0 2\n"
        )
        draid = report.config["tank"].children["draid2:8d:10c:1s-0"]
        assert draid.children["wwn-0x5000.c500_a"].cksum_err == 2
