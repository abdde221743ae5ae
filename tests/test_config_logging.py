"""Tests for settings and structured logging."""

import logging

from app.core.config import get_settings
from app.core.logging import StructuredFormatter, log_with_context


def _record(msg: str = "Check-in scored", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.core.scoring.engine",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
        func="compute_score",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSettings:
    def test_defaults(self, monkeypatch, override_settings):
        for name in ("SCORE_DECIMALS", "DEFAULT_BAND_PRESET", "MAX_TEMPLATE_QUESTIONS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = override_settings()

        assert settings.CHECKIN_ENV == "test"
        assert settings.SCORE_DECIMALS == 1
        assert settings.DEFAULT_BAND_PRESET == "custom"
        assert settings.MAX_TEMPLATE_QUESTIONS == 500
        assert settings.LOG_LEVEL is None

    def test_environment_overrides(self, override_settings):
        settings = override_settings(SCORE_DECIMALS=2, DEFAULT_BAND_PRESET="advanced")

        assert settings.SCORE_DECIMALS == 2
        assert settings.DEFAULT_BAND_PRESET == "advanced"

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()


class TestStructuredFormatter:
    def test_key_value_output(self):
        line = StructuredFormatter().format(_record(template_id="tpl-1", extra_data={"overall": 82.5}))

        assert "level=INFO" in line
        assert "logger=app.core.scoring.engine" in line
        assert 'message="Check-in scored"' in line
        assert "template_id=tpl-1" in line
        assert line.endswith("overall=82.5")

    def test_log_with_context_lifts_template_fields(self):
        captured: list[logging.LogRecord] = []

        class _Collect(logging.Handler):
            def emit(self, record):
                captured.append(record)

        logger = logging.getLogger("tests.log_with_context")
        logger.addHandler(_Collect())
        logger.setLevel(logging.INFO)

        log_with_context(logger, logging.INFO, "scored", template_id="tpl-9", band="Good")

        assert captured[0].template_id == "tpl-9"
        assert captured[0].extra_data == {"band": "Good"}
