from loguru import logger

from dndref.logging import configure_logging


def test_configure_logging_level(capsys):
    configure_logging("warning")

    logger.info("quiet message")
    logger.warning("loud message")

    err = capsys.readouterr().err
    assert "loud message" in err
    assert "quiet message" not in err
    assert "WARNING" in err


def test_configure_logging_debug(capsys):
    configure_logging("DEBUG")

    logger.debug("trying upstream")

    assert "trying upstream" in capsys.readouterr().err
