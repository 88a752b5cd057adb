import json
import logging
from io import StringIO

import pytest

from ..logger import find_parent_module, create_logger, setup_logging, JsonFormatter
from .. import logger as logger_module

logger = create_logger()


@pytest.fixture()
def io_logger():
    io = StringIO()
    handler = setup_logging(stream=io, env_var=None)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.setLevel(logging.DEBUG)
    yield io
    setup_logging()


@pytest.fixture()
def loggingconfigfile(tmp_path, monkeypatch):
    logging_conf = """
[loggers]
keys=root

[logger_root]
handlers=file
level=NOTSET

[handlers]
keys=file

[handler_file]
class=FileHandler
level=%(level_file)s
formatter=file
args=('%(logfile_path)s',)

[formatters]
keys=file

[formatter_file]
format=FILE %%(levelname)s: %%(message)s
"""
    logfile = tmp_path / "ugcache.log"
    conffile = tmp_path / "ugcache_logging.conf"
    conffile.write_text(logging_conf % dict(level_file="INFO", logfile_path=str(logfile)))
    monkeypatch.setenv("UGCACHE_LOGGING_CONF", str(conffile))
    yield logfile
    setup_logging(env_var=None)


def test_setup_logging(io_logger):
    logger.info("hello world")
    assert io_logger.getvalue() == "ugcache.testsuite.logger_test: hello world\n"


def test_setup_logging_configfile(loggingconfigfile):
    assert setup_logging() is None
    logger.debug("hello debug")
    logger.info("hello info")
    logger.warning("hello warning")
    for handler in logging.getLogger().handlers:
        handler.flush()
    contents = loggingconfigfile.read_text()
    assert "FILE DEBUG: hello debug\n" not in contents
    assert "FILE INFO: hello info\n" in contents
    assert "FILE WARNING: hello warning\n" in contents


def test_setup_logging_bad_configfile(tmp_path, monkeypatch):
    io = StringIO()
    monkeypatch.setenv("UGCACHE_LOGGING_CONF", str(tmp_path / "missing.conf"))
    handler = setup_logging(stream=io, level="warning")
    try:
        assert handler is not None
        assert "missing.conf" in io.getvalue()
        assert "failed with" in io.getvalue()
    finally:
        setup_logging(env_var=None)


def test_multiple_loggers(io_logger):
    logger = logging.getLogger(__name__)
    logger.info("hello world 1")
    assert io_logger.getvalue() == "ugcache.testsuite.logger_test: hello world 1\n"
    logger = logging.getLogger("ugcache.testsuite.logger_test")
    logger.info("hello world 2")
    assert (
        io_logger.getvalue()
        == "ugcache.testsuite.logger_test: hello world 1\nugcache.testsuite.logger_test: hello world 2\n"
    )


def test_parent_module():
    assert find_parent_module() == __name__


def test_lazy_logger():
    # just calling all the methods of the proxy
    logger.setLevel(logging.DEBUG)
    logger.debug("debug")
    logger.info("info")
    logger.warning("warning")
    logger.error("error")
    logger.critical("critical")
    logger.log(logging.INFO, "info")
    try:
        raise Exception
    except Exception:
        logger.exception("exception")
    assert logger.name == __name__
    assert logger.getChild("child").name == __name__ + ".child"
    assert logger.isEnabledFor(logging.DEBUG)


def test_lazy_logger_usable_without_setup():
    # library code may log before (or without) the application configuring logging
    logger_module.remove_handlers(logging.getLogger())
    try:
        create_logger("ugcache.testsuite.unconfigured").warning("no setup needed")
    finally:
        setup_logging(env_var=None)


def test_msgid_is_passed_on(io_logger):
    io_logger.truncate(0)
    io_logger.seek(0)
    records = []

    class Collector(logging.Handler):
        def emit(self, record):
            records.append(record)

    collector = Collector()
    logging.getLogger().addHandler(collector)
    try:
        logger.warning("with id", msgid="Some.Id")
    finally:
        logging.getLogger().removeHandler(collector)
    assert records[0].msgid == "Some.Id"


def test_json_formatter():
    record = logging.LogRecord("ugcache.cache", logging.WARNING, __file__, 1, "uid %d not found", (42,), None)
    record.msgid = "NotFound"
    data = json.loads(JsonFormatter("%(message)s").format(record))
    assert data["type"] == "log_message"
    assert data["levelname"] == "WARNING"
    assert data["name"] == "ugcache.cache"
    assert data["message"] == "uid 42 not found"
    assert data["msgid"] == "NotFound"


def test_setup_logging_json():
    io = StringIO()
    setup_logging(stream=io, env_var=None, log_json=True)
    try:
        logging.getLogger("ugcache.x").warning("hello json")
        data = json.loads(io.getvalue().splitlines()[-1])
        assert data["message"] == "hello json"
    finally:
        setup_logging(env_var=None)
