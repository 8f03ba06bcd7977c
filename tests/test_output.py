import io
import logging
import pytest

from vetocore.output import Output, VERBOSITY_TO_NAME, DETAILS, INFO, WARNING
from vetocore.preferences import Profile
from vetocore import vetorules


@pytest.mark.parametrize("verbosity", VERBOSITY_TO_NAME.keys())
def test_verbosity(capfd, verbosity):
    output = Output(verbosity=verbosity)
    output.debug2("debug2")
    output.debug("debug")
    output.details("details")
    output.info("info")
    output.warning("warning")
    output.error("error")
    output.critical("critical")

    stdout = capfd.readouterr().out
    for verbosity_value, verbosity_name in VERBOSITY_TO_NAME.items():
        if verbosity_value >= verbosity:
            assert verbosity_name.lower() in stdout
        else:
            assert verbosity_name.lower() not in stdout


def test_verbosity2(capfd):
    output = Output(verbosity=INFO)
    output.details("details")
    output.info("info")

    stdout = capfd.readouterr().out

    assert "info\n" in stdout
    assert "details\n" not in stdout

    output.set_verbosity(DETAILS)
    output.details("details")
    output.info("info")

    stdout = capfd.readouterr().out

    assert "info\n" in stdout
    assert "details\n" in stdout


def test_default_is_silent_for_info(capfd):
    output = Output()
    assert output.verbosity == WARNING
    output.info("info")
    output.warning("warning")
    stdout = capfd.readouterr().out
    assert "info" not in stdout
    assert "warning\n" in stdout


def test_wrap_and_indent(capfd):
    output = Output(verbosity=INFO)
    output.info("word " * 40, indent="  ")
    stdout = capfd.readouterr().out
    lines = stdout.rstrip("\n").split("\n")
    assert len(lines) > 1
    assert all(line.startswith("  ") for line in lines)
    assert all(len(line) <= 79 for line in lines)


@pytest.mark.parametrize("verbosity", [INFO, DETAILS])
def test_logger(capfd, verbosity):
    logger = logging.getLogger("testoutput")
    logger.setLevel(logging.DEBUG)

    logger_output = io.StringIO("test")
    handler = logging.StreamHandler(stream=logger_output)
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)

    output = Output()
    output.set_verbosity(verbosity)
    output.logger = logger
    output.info("info")
    output.debug2("debug2")
    output.debug("debug")
    output.details("details")

    handler.flush()
    logger.removeHandler(handler)

    stdout = capfd.readouterr().out
    logger_output_str = logger_output.getvalue()

    assert "info\n" in stdout
    assert "debug2\n" not in stdout
    if verbosity <= DETAILS:
        assert "details\n" in stdout

    # always printed, independent of verbosity, determined by logger's level
    assert "info\n" in logger_output_str
    assert "details\n" in logger_output_str
    assert "debug2\n" in logger_output_str


def test_output_of_pvc_computation(capfd):
    profile = Profile(3)
    profile.add_voters(["abc", "cba"])
    vetorules.output.set_verbosity(DETAILS)
    try:
        vetorules.compute_pvc(profile, algorithm="standard-fractions")
    finally:
        vetorules.output.set_verbosity(WARNING)
    stdout = capfd.readouterr().out
    assert "Proportional Veto Core (PVC)" in stdout
    assert "Algorithm: " in stdout
    assert "veto power per voter (m-1)/n = 1" in stdout
    assert "c is vetoed by {voter 0}" in stdout
    assert "PVC (1 alternative):\n {b}\n" in stdout
