""" Tests for the utils module functions """

import tomllib
from pathlib import Path

from faptopia.utils import guess_video_type, get_version, NullLogger


def test_guess_video_type():
    """ Tests the guess_video_type function """
    assert guess_video_type("https://i.4cdn.org/gif/1.webm") == "video/webm"
    assert guess_video_type("https://i.4cdn.org/gif/1.WEBM") == "video/webm"
    assert guess_video_type("https://i.4cdn.org/gif/1.mp4") == "video/mp4"
    assert guess_video_type("https://media.redgifs.com/Clip.mp4?for=1.webm") == "video/mp4"


def test_get_version():
    """ Tests that the version comes from pyproject.toml """
    with open(Path(__file__).parent.parent / "pyproject.toml", "rb") as f:
        assert get_version() == tomllib.load(f)["project"]["version"]


def test_null_logger(capsys):
    """ Tests the NullLogger class """
    logger = NullLogger()
    logger.debug("Debug message")
    logger.info("Info message")
    logger.warning("Warning message")
    logger.error("Error message")
    logger.critical("Critical message")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
