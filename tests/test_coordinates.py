"""
Tests for coordinate extraction and the positioned-ancestor lookup.
"""

from types import SimpleNamespace

from pointer_tracker.core.elements import Element
from pointer_tracker.core.events import GestureEvent, Touch, mouse_event, touch_event
from pointer_tracker.utils.coordinates import get_page_xy, get_non_static_parent
from pointer_tracker.utils.gesture_utils import Point


class TestGetPageXY:

    def test_mouse_event_uses_its_own_coordinates(self):
        assert get_page_xy(mouse_event("mousemove", 12, 34)) == Point(12, 34)

    def test_touch_event_uses_first_touch(self):
        event = touch_event("touchmove", [Touch(0, 5, 6), Touch(1, 70, 80)])
        assert get_page_xy(event) == Point(5, 6)

    def test_touch_end_without_touches_falls_back_to_event(self):
        event = touch_event("touchend", [])
        assert get_page_xy(event) == Point(None, None)

    def test_malformed_event_does_not_raise(self):
        assert get_page_xy(object()) == Point(None, None)
        assert get_page_xy(SimpleNamespace(target_touches=None, page_x=3)) == Point(3, None)

    def test_empty_touch_list_uses_event_coordinates(self):
        event = GestureEvent("touchstart", page_x=9, page_y=10)
        assert get_page_xy(event) == Point(9, 10)


class TestGetNonStaticParent:

    def test_finds_positioned_ancestor(self, document, container):
        middle = container.append(Element("div"))
        leaf = middle.append(Element("span"))
        assert get_non_static_parent(leaf) is container

    def test_falls_back_to_body(self, document):
        outer = document.body.append(Element("div"))
        leaf = outer.append(Element("span"))
        assert get_non_static_parent(leaf) is document.body

    def test_direct_child_of_positioned_parent(self, container, box):
        assert get_non_static_parent(box) is container

    def test_never_returns_the_root(self, document):
        document.root.style["position"] = "relative"
        leaf = document.body.append(Element("div"))
        assert get_non_static_parent(leaf) is document.body

    def test_detached_element(self):
        assert get_non_static_parent(Element("div")) is None
