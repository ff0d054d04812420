""" This file contains helper functions for the faptopia package. """

from pathlib import Path
from logging import Logger
from urllib.parse import urlparse
import tomllib
import importlib.metadata
import importlib.util


def guess_video_type(url: str) -> str:
    """ Guesses the MIME type of a video from the extension of its URL """
    if Path(urlparse(url).path).suffix.lower() == ".webm":
        return "video/webm"
    return "video/mp4"


class NullLogger(Logger):
    """ A logger that logs nothing """

    def __init__(self):
        super().__init__("NullLogger")

    def debug(self, *args, **kwargs):
        pass

    def info(self, *args, **kwargs):
        pass

    def warning(self, *args, **kwargs):
        pass

    def error(self, *args, **kwargs):
        pass

    def critical(self, *args, **kwargs):
        pass


def find_pyproject_from_module(module_name: str) -> Path:
    """
    Given a module name (e.g. 'myapp'), find its installation root,
    then walk upward to find pyproject.toml.
    """
    spec = importlib.util.find_spec(module_name)
    if spec is None or not spec.origin:
        raise ImportError(f"Cannot find module {module_name}")

    current = Path(spec.origin).resolve().parent
    while current != current.parent:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        current = current.parent
    raise FileNotFoundError("pyproject.toml not found")

def get_version() -> str:
    """ Returns the current version. """
    try:
        pyproject = find_pyproject_from_module('faptopia')
    except FileNotFoundError:
        # Installed without the source tree around it
        return importlib.metadata.version('faptopia')

    with open(pyproject, 'rb') as f:
        # noinspection PyTypeChecker
        pyproject_data = tomllib.load(f)
    return pyproject_data['project']['version']
