import logging

import pytest

from ecotree.plot.painter import Painter
from ecotree.tree import Tree

SCENARIO_NEWICK = "((A:0.1,B:0.2):0.3,(C:0.4,D:0.5):0.6);"
NAMED_NEWICK = "((A:0.1,B:0.2)AB:0.3,(C:0.4,D:0.5)CD:0.6);"


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class RecordingPainter(Painter):
    """Painter that records every call; optionally fails on the n-th line."""

    def __init__(self, font_width=6, font_height=10, fail_on_line=None):
        self._font_width = font_width
        self._font_height = font_height
        self.fail_on_line = fail_on_line
        self.calls = []

    def font_width(self):
        return self._font_width

    def font_height(self):
        return self._font_height

    def start(self, width, height):
        self.calls.append(("start", width, height))

    def draw_string(self, text, x, y):
        self.calls.append(("string", text, x, y))

    def draw_line(self, x1, y1, x2, y2, stroke_width):
        if self.fail_on_line is not None and len(self.lines) == self.fail_on_line:
            raise RuntimeError("surface lost")
        self.calls.append(("line", x1, y1, x2, y2, stroke_width))

    def end(self):
        self.calls.append(("end",))

    @property
    def strings(self):
        return [call[1:] for call in self.calls if call[0] == "string"]

    @property
    def lines(self):
        return [call[1:] for call in self.calls if call[0] == "line"]


@pytest.fixture
def scenario_newick():
    return SCENARIO_NEWICK


@pytest.fixture
def scenario_tree():
    return Tree(SCENARIO_NEWICK)


@pytest.fixture
def named_tree():
    return Tree(NAMED_NEWICK)


@pytest.fixture
def recording_painter():
    return RecordingPainter()


@pytest.fixture
def failing_painter():
    return RecordingPainter(fail_on_line=2)


@pytest.fixture
def deep_newick():
    """A caterpillar tree nested a few thousand levels deep."""
    text = "a0:1"
    for i in range(1, 3000):
        text = f"({text},a{i}:1):1"
    return text + ";"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging (the CLI installs them too)."""
    yield
    logger = logging.getLogger("ecotree")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
