##############################################################################
# Copyright (c) CADCAM DB project developers. See the top-level LICENSE file
# for details. No copyright assignment is required to contribute.
##############################################################################
"""
Tests for the `log_formatter.py` module.
"""
import logging

from pytest_mock import MockerFixture

from cadcam_db.log_formatter import FORMATS, setup_logging


def test_setup_logging_with_colors(mocker: MockerFixture):
    """
    Test that coloredlogs installs the handler when colors are on.

    Args:
        mocker: PyTest mocker fixture.
    """
    mock_install = mocker.patch("cadcam_db.log_formatter.coloredlogs.install")
    logger = logging.getLogger("cadcam_db")

    setup_logging(logger, log_level="debug")

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    mock_install.assert_called_once()
    assert mock_install.call_args.kwargs["level"] == "DEBUG"
    assert mock_install.call_args.kwargs["fmt"] == FORMATS["DEBUG"]
    assert mock_install.call_args.kwargs["logger"] is logger


def test_setup_logging_without_colors(mocker: MockerFixture):
    """
    Test that a plain stream handler is used when colors are off.

    Args:
        mocker: PyTest mocker fixture.
    """
    mock_install = mocker.patch("cadcam_db.log_formatter.coloredlogs.install")
    logger = logging.getLogger("cadcam_db")
    handlers_before = len(logger.handlers)

    setup_logging(logger, log_level="WARNING", colors=False)

    mock_install.assert_not_called()
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == handlers_before + 1
    assert logger.handlers[-1].formatter._fmt == FORMATS["DEFAULT"]  # pylint: disable=protected-access
