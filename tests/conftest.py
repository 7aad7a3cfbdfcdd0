"""
Shared fixtures: a small page with a positioned container holding a box.
"""

import pytest

from pointer_tracker.core.elements import Document, Element
from pointer_tracker.core.events import Touch, mouse_event, touch_event


@pytest.fixture
def document():
    return Document(800, 600)


@pytest.fixture
def container(document):
    """A relatively positioned container at (100, 50) in the body."""
    return document.body.append(
        Element("div", classes=("board",), element_id="board", x=100, y=50,
                width=400, height=400, position="relative")
    )


@pytest.fixture
def box(container):
    """An absolutely positioned 40x40 box at (20, 30) inside the container."""
    element = container.append(Element("div", classes=("box",), width=40, height=40,
                                       position="absolute"))
    element.style["left"] = "20px"
    element.style["top"] = "30px"
    return element


def mouse(document, event_type, x, y, target=None):
    """Dispatch a mouse event and return it."""
    event = mouse_event(event_type, x, y, target=target or document.element_at(x, y))
    document.dispatch(event)
    return event


def touch(document, event_type, points, target=None):
    """Dispatch a touch event with the given (x, y) touch points and return it."""
    touches = [Touch(index, x, y) for index, (x, y) in enumerate(points)]
    if target is None:
        target = document.element_at(*points[0]) if points else document.body
    event = touch_event(event_type, touches, target=target)
    document.dispatch(event)
    return event
