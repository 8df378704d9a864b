import io
import logging
from pathlib import Path

from build_constants.foundation.logging_utils import LOGGER_NAME, setup_logger
from build_constants.framework.constants import build_constant_set
from build_constants.framework.generator import write_constants


def _constant_set():
    return build_constant_set(
        "org.cthing.test.Constants",
        project_name="testProject",
        project_version="1.2.3",
        project_group="org.cthing",
        build_time_millis=1718946725000,
    )


def test_generator_logs_the_class_being_written(tmp_path: Path):
    stream = io.StringIO()
    setup_logger(stream=stream)

    write_constants(_constant_set(), tmp_path)

    output = stream.getvalue()
    assert "| INFO | Writing constants class org.cthing.test.Constants" in output
    assert "Wrote " not in output


def test_verbose_logging_includes_debug_details(tmp_path: Path):
    stream = io.StringIO()
    setup_logger(verbose=True, stream=stream)

    path = write_constants(_constant_set(), tmp_path)

    assert f"| DEBUG | Wrote {path}" in stream.getvalue()


def test_setup_logger_is_idempotent():
    first = setup_logger(stream=io.StringIO())
    second = setup_logger(stream=io.StringIO())

    assert first is second is logging.getLogger(LOGGER_NAME)
    assert len(second.handlers) == 1
    assert second.propagate is False
