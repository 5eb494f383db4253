"""Tests for build logging setup."""

import logging

from src.content.services.build_logger import BuildLogFormatter, setup_build_logging
from src.content.services.collection import ContentCollection


class TestBuildLogging:
    """Test root logger configuration."""

    def test_console_handler_installed(self):
        setup_build_logging("DEBUG")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, BuildLogFormatter)

    def test_unknown_level_defaults_to_info(self):
        setup_build_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "build.log"
        setup_build_logging("INFO", str(log_file))

        logging.getLogger("src.content.test").warning("Unsupported language: %s", "fr")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[WARNING] [src.content.test] Unsupported language: fr" in content

    def test_timestamp_has_milliseconds(self):
        formatter = BuildLogFormatter(fmt="%(asctime)s")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        timestamp = formatter.format(record)

        date_part, millis = timestamp.rsplit(".", 1)
        assert len(millis) == 3
        assert len(date_part) == len("2024-01-01 00:00:00")


class TestEntryTag:
    """Test the content entry prefix on log lines."""

    @staticmethod
    def _record(**extra):
        record = logging.LogRecord(
            "src.content.services.collection",
            logging.ERROR,
            __file__,
            1,
            "Field required",
            None,
            None,
        )
        record.__dict__.update(extra)
        return record

    def test_entry_and_field(self):
        formatter = BuildLogFormatter(fmt="%(entry)s%(message)s")

        line = formatter.format(self._record(entry_id="hello.md", field="title"))

        assert line == "[hello.md:title] Field required"

    def test_entry_without_field(self):
        formatter = BuildLogFormatter(fmt="%(entry)s%(message)s")

        assert formatter.format(self._record(entry_id="hello.md")) == "[hello.md] Field required"

    def test_plain_record_has_no_prefix(self):
        formatter = BuildLogFormatter(fmt="%(entry)s%(message)s")

        assert formatter.format(self._record()) == "Field required"

    def test_validation_failure_reaches_log_file(self, tmp_path, write_post, valid_frontmatter):
        log_file = tmp_path / "build.log"
        setup_build_logging("INFO", str(log_file))
        del valid_frontmatter["title"]
        write_post("broken.md", valid_frontmatter)

        ContentCollection("blog", write_post.directory).validate_all()
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[ERROR] [src.content.services.collection] [broken.md:title]" in content
