"""Tests for the notification log."""
import logging

from staffrota.models.notification import NotificationLog, Severity


class TestNotificationLog:
    """Tests for NotificationLog."""

    def test_emit_and_iterate(self):
        log = NotificationLog()
        log.info("a", "first")
        log.warning("b", "second", rotation_id=2)
        log.critical("c", "third", rotation_id=2)
        assert [n.id for n in log] == ["a", "b", "c"]
        assert len(log) == 3
        assert "b" in log

    def test_duplicate_id_not_appended(self):
        log = NotificationLog()
        assert log.info("a", "first") is not None
        assert log.info("a", "again") is None
        assert len(log) == 1
        assert log.items[0].message == "first"

    def test_filters(self):
        log = NotificationLog()
        log.info("a", "context")
        log.warning("b", "bent", rotation_id=1)
        log.critical("c", "short", rotation_id=2)
        assert [n.id for n in log.by_rotation(2)] == ["c"]
        assert [n.id for n in log.by_severity("warning")] == ["b"]
        assert log.has_critical
        assert log.counts() == {"info": 1, "warning": 1, "critical": 1}

    def test_items_is_a_snapshot(self):
        log = NotificationLog()
        log.info("a", "x")
        items = log.items
        items.clear()
        assert len(log) == 1

    def test_to_dataframe(self):
        log = NotificationLog()
        assert list(log.to_dataframe().columns) == ["id", "severity", "message", "rotation_id"]
        log.critical("c", "short", rotation_id=3)
        df = log.to_dataframe()
        assert df.iloc[0]["severity"] == "critical"
        assert df.iloc[0]["rotation_id"] == 3

    def test_mirrored_to_logging(self, caplog):
        log = NotificationLog()
        with caplog.at_level(logging.INFO, logger="staffrota"):
            log.info("a", "context note")
            log.warning("b", "rule bent")
            log.critical("c", "station short")
        levels = [r.levelno for r in caplog.records if r.name == "staffrota.notifications"]
        assert levels == [logging.INFO, logging.WARNING, logging.ERROR]
        assert "station short" in caplog.text

    def test_severity_log_levels(self):
        assert Severity.INFO.log_level == logging.INFO
        assert Severity.CRITICAL.log_level == logging.ERROR
