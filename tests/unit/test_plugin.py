import pytest

from zpool_health import plugin
from zpool_health.zfs_operations.core.entities.evaluation import EvaluationResult, Severity
from zpool_health.zfs_operations.infrastructure.command_executor import CommandExecutor
from tests.conftest import fake_zpool

# Keeps the fixture scrub dates within bounds regardless of today's date
RELAXED_SCRUB = ["-w", "*.scrub.100000", "-c", "*.scrub.200000"]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in ("TIMEOUT", "INCLUDE", "EXCLUDE", "WARNING", "CRITICAL", "THRESHOLDS_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(f"ZPOOL_HEALTH_{key}", raising=False)


@pytest.fixture
def zpool(mocker):
    """Route the real executor to canned zpool output."""
    return mocker.patch.object(CommandExecutor, "execute_system", side_effect=fake_zpool())


class TestCheckMessages:
    def test_orders_critical_warning_ok(self):
        results = [
            EvaluationResult("a", Severity.OK, "a ok"),
            EvaluationResult("b", Severity.WARNING, "b warn"),
            EvaluationResult("c", Severity.CRITICAL, "c crit"),
            EvaluationResult("d", Severity.WARNING, "d warn"),
        ]
        code, text = plugin.check_messages(results)
        assert code == Severity.CRITICAL
        assert text == "c crit;b warn;d warn;a ok"

    def test_all_ok(self):
        code, text = plugin.check_messages([EvaluationResult("a", Severity.OK, "a ok")])
        assert code == Severity.OK
        assert text == "a ok"


class TestPluginMain:
    def test_healthy_pool(self, zpool, capsys):
        code = plugin.main(["-i", "tank"] + RELAXED_SCRUB)

        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("ZPOOL OK - tank: H=ONLINE, C=50%, F10%, L=0, S=")

    def test_all_pools_worst_first(self, zpool, capsys):
        code = plugin.main(RELAXED_SCRUB)

        out = capsys.readouterr().out.strip()
        assert code == 2
        assert out.startswith("ZPOOL CRITICAL - data: H=DEGRADED")
        assert ";tank: H=ONLINE" in out

    def test_exclude(self, zpool, capsys):
        code = plugin.main(["-e", "data"] + RELAXED_SCRUB)
        assert code == 0
        assert "data:" not in capsys.readouterr().out

    def test_unknown_category_is_unknown(self, zpool, capsys):
        code = plugin.main(["-w", "tank.bogus.5"])

        assert code == 3
        assert capsys.readouterr().out.strip() == "ZPOOL UNKNOWN - invalid category bogus"
        zpool.assert_not_called()

    def test_no_pools_found(self, zpool, capsys):
        code = plugin.main(["-i", "ghost"])

        assert code == 3
        assert capsys.readouterr().out.strip() == "ZPOOL UNKNOWN - no pools found"

    def test_verbose_dumps_failed_output(self, mocker, capsys):
        mocker.patch.object(CommandExecutor, "execute_system", side_effect=fake_zpool(failing=("list",)))

        code = plugin.main(["-v"])

        captured = capsys.readouterr()
        assert code == 3
        assert captured.out.strip() == "ZPOOL UNKNOWN - zpool list failed"
        assert "zpool list failed, output:" in captured.err
        assert "\tno such pool" in captured.err

    def test_thresholds_from_environment(self, zpool, monkeypatch, capsys):
        monkeypatch.setenv("ZPOOL_HEALTH_WARNING", "*.scrub.100000")
        monkeypatch.setenv("ZPOOL_HEALTH_CRITICAL", "*.scrub.200000,tank.capacity.40")

        code = plugin.main(["-i", "tank"])

        assert code == 2
        assert capsys.readouterr().out.startswith("ZPOOL CRITICAL - tank:")

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            plugin.main(["-V"])
        assert exc_info.value.code == 0
        assert "check_zpool" in capsys.readouterr().out

    def test_unreadable_thresholds_file_is_unknown(self, zpool, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("ZPOOL_HEALTH_THRESHOLDS_FILE", str(tmp_path / "absent.yaml"))

        code = plugin.main([])

        assert code == 3
        assert capsys.readouterr().out.startswith("ZPOOL UNKNOWN - failed to load thresholds file")
        zpool.assert_not_called()
