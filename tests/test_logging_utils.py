import logging
import unittest

from utils import logging_utils
from utils.logging_utils import (
    EnsureTagFilter,
    JobNameFilter,
    MaxLevelFilter,
    build_logging_config,
    get_tagged_logger,
)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        self.records.append(record)


def _record(name="irrigation_weather.data_sources.brightsky_client", level=logging.INFO):
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


class TestLoggingUtils(unittest.TestCase):
    def test_build_logging_config_has_expected_handlers_and_filters(self):
        cfg = build_logging_config(job_name="jobtest")
        self.assertIn("stdout", cfg["handlers"])
        self.assertIn("stderr", cfg["handlers"])
        self.assertEqual(cfg["filters"]["job_name"]["job_name"], "jobtest")
        self.assertIn("stdout_max_info", cfg["handlers"]["stdout"]["filters"])
        self.assertNotIn("stdout_max_info", cfg["handlers"]["stderr"]["filters"])

    def test_get_tagged_logger_injects_tag(self):
        handler = _ListHandler()
        logger = get_tagged_logger("irrigation_weather.test", tag="custom_tag")
        base_logger = logger.logger
        base_logger.setLevel(logging.DEBUG)
        base_logger.addHandler(handler)
        base_logger.propagate = False
        try:
            logger.info("hello world")
            self.assertEqual(handler.records[-1].tag, "custom_tag")
        finally:
            base_logger.removeHandler(handler)
            base_logger.propagate = True

    def test_default_tag_is_last_name_segment(self):
        logger = get_tagged_logger("irrigation_weather.forecast_resampler")
        self.assertEqual(logger.extra["tag"], "forecast_resampler")

    def test_filters_fill_missing_fields(self):
        record = _record()
        self.assertTrue(EnsureTagFilter().filter(record))
        self.assertTrue(JobNameFilter("svc").filter(record))
        self.assertEqual(record.tag, "brightsky_client")
        self.assertEqual(record.job_name, "svc")

    def test_max_level_filter(self):
        f = MaxLevelFilter(logging.INFO)
        self.assertTrue(f.filter(_record(level=logging.INFO)))
        self.assertFalse(f.filter(_record(level=logging.WARNING)))

    def test_setup_logging_override_applies_filters(self):
        root = logging.getLogger()
        orig_handlers = root.handlers[:]
        orig_level = root.level
        try:
            logging_utils.setup_logging(level="INFO", job_name="jobtest", override_existing=True)
            self.assertTrue(
                any(
                    any(isinstance(f, JobNameFilter) for f in h.filters)
                    for h in root.handlers
                )
            )
        finally:
            root.handlers = orig_handlers
            root.setLevel(orig_level)
            logging_utils._CONFIGURED = False  # reset for other tests


if __name__ == "__main__":
    unittest.main()
