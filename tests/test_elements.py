"""
Tests for the element tree: selectors, layout, listeners and dispatch.
"""

import pytest

from pointer_tracker.core.elements import Document, Element, parse_px
from pointer_tracker.core.events import mouse_event
from pointer_tracker.utils.gesture_utils import Rect


class TestSelectors:

    @pytest.fixture
    def tree(self, document):
        outer = document.body.append(Element("section", classes=("piece", "white-king"), element_id="outer"))
        inner = outer.append(Element("span", classes=("label",)))
        return outer, inner

    def test_matches_compound_selectors(self, tree):
        outer, inner = tree
        assert outer.matches("section")
        assert outer.matches(".piece.white-king")
        assert outer.matches("section#outer.piece")
        assert outer.matches("*")
        assert not outer.matches(".black-king")
        assert not outer.matches("div.piece")
        assert inner.matches(".nothing, span")

    def test_closest_includes_the_element_itself(self, tree):
        outer, inner = tree
        assert inner.closest(".label") is inner
        assert inner.closest(".piece") is outer
        assert inner.closest("#missing") is None

    def test_unsupported_selector(self, tree):
        outer, _ = tree
        with pytest.raises(ValueError):
            outer.matches("section > span")

    def test_query_selectors(self, document, tree):
        outer, inner = tree
        assert document.query_selector_all(".piece") == [outer]
        assert document.query_selector("span") is inner
        assert document.get_element_by_id("outer") is outer
        assert document.query_selector(".missing") is None

    def test_class_name_round_trip(self):
        element = Element(classes=("a", "b"))
        element.class_name = "c  d c"
        assert list(element.class_list) == ["c", "d"]
        assert element.class_name == "c d"
        assert element.class_list.toggle("e") is True
        assert "e" in element.class_list


class TestLayout:

    def test_static_elements_follow_parent(self, document):
        outer = document.body.append(Element(x=10, y=20, width=100, height=100))
        inner = outer.append(Element(x=5, y=5, width=10, height=10))
        assert inner.get_bounding_client_rect() == Rect(15, 25, 10, 10)

    def test_relative_elements_are_shifted(self, document):
        element = document.body.append(Element(x=10, y=10, position="relative"))
        element.style["left"] = "5px"
        element.style["top"] = "-5px"
        assert element.get_bounding_client_rect()[:2] == (15, 5)

    def test_absolute_elements_use_containing_block(self, container, box):
        assert box.containing_block() is container
        assert box.get_bounding_client_rect() == Rect(120, 80, 40, 40)

    def test_absolute_element_without_left_stays_in_place(self, container):
        element = container.append(Element(x=7, y=8, position="absolute"))
        assert element.get_bounding_client_rect()[:2] == (107, 58)

    def test_stylesheet_rules_apply_after_inline_styles(self, document, container):
        document.add_rule(".piece", position="absolute")
        document.add_rule(".c-b", left="80px")
        document.add_rule(".r-7", top="80px")
        piece = container.append(Element(classes=("piece", "c-b", "r-7")))
        assert piece.computed_position == "absolute"
        assert piece.get_bounding_client_rect()[:2] == (180, 130)

        piece.style["left"] = "0px"
        assert piece.get_bounding_client_rect()[:2] == (100, 130)

    def test_parse_px(self):
        assert parse_px("12px") == 12
        assert parse_px("-3.5px") == -3.5
        assert parse_px(4) == 4
        assert parse_px("") is None
        assert parse_px("auto") is None


class TestHitTesting:

    def test_deepest_element_under_point(self, document, container, box):
        assert document.element_at(130, 90) is box
        assert document.element_at(300, 300) is container
        assert document.element_at(790, 590) is document.body

    def test_z_index_puts_element_on_top(self, document, container):
        first = container.append(Element(width=50, height=50, position="absolute"))
        second = container.append(Element(width=50, height=50, position="absolute"))
        assert document.element_at(110, 60) is second
        first.style["z-index"] = "1"
        assert document.element_at(110, 60) is first


class TestListeners:

    def test_duplicate_registration_is_ignored(self, document):
        calls = []
        listener = calls.append
        document.body.add_listener("mousemove", listener)
        document.body.add_listener("mousemove", listener)
        assert document.body.listener_count("mousemove") == 1

    def test_removal_is_by_identity(self, document):
        def make_listener():
            return lambda event: None

        listener = make_listener()
        document.body.add_listener("mouseup", listener)
        document.body.remove_listener("mouseup", make_listener())
        assert document.body.has_listener("mouseup", listener)
        document.body.remove_listener("mouseup", listener)
        assert document.body.listener_count() == 0
        # Removing again is harmless
        document.body.remove_listener("mouseup", listener)

    def test_capture_flag_is_part_of_the_registration(self, document):
        listener = lambda event: None
        document.body.add_listener("mousedown", listener, capture=True)
        document.body.remove_listener("mousedown", listener)
        assert document.body.listener_count("mousedown") == 1
        document.body.remove_listener("mousedown", listener, capture=True)
        assert document.body.listener_count("mousedown") == 0


class TestDispatch:

    def test_capture_target_bubble_order(self, document, container, box):
        order = []
        document.add_listener("mousedown", lambda e: order.append("document capture"), capture=True)
        container.add_listener("mousedown", lambda e: order.append("container capture"), capture=True)
        box.add_listener("mousedown", lambda e: order.append("box"))
        container.add_listener("mousedown", lambda e: order.append("container bubble"))
        document.body.add_listener("mousedown", lambda e: order.append("body bubble"))
        document.add_listener("mousedown", lambda e: order.append("document bubble"))

        document.dispatch(mouse_event("mousedown", 130, 90, target=box))
        assert order == [
            "document capture", "container capture", "box",
            "container bubble", "body bubble", "document bubble",
        ]

    def test_current_target_and_stop_propagation(self, document, container, box):
        seen = []

        def stop(event):
            seen.append(event.current_target)
            event.stop_propagation()

        container.add_listener("mouseup", stop)
        document.body.add_listener("mouseup", lambda e: seen.append("body"))
        event = mouse_event("mouseup", 0, 0, target=box)
        document.dispatch(event)
        assert seen == [container]
        assert event.current_target is None

    def test_untargeted_events_go_to_body(self, document):
        seen = []
        document.body.add_listener("mousemove", lambda e: seen.append(e.target))
        document.dispatch(mouse_event("mousemove", 1, 1))
        assert seen == [document.body]

    def test_passive_listeners_cannot_prevent_default(self, document):
        document.add_listener("touchstart", lambda e: e.prevent_default(), passive=True)
        event = mouse_event("touchstart", 0, 0)
        assert document.dispatch(event) is True
        assert not event.default_prevented

        document.add_listener("touchstart", lambda e: e.prevent_default(), passive=False)
        assert document.dispatch(mouse_event("touchstart", 0, 0)) is False

    def test_listener_removed_during_dispatch_is_skipped(self, document):
        calls = []

        def second(event):
            calls.append("second")

        def first(event):
            calls.append("first")
            document.body.remove_listener("mousemove", second)

        document.body.add_listener("mousemove", first)
        document.body.add_listener("mousemove", second)
        document.dispatch(mouse_event("mousemove", 0, 0))
        assert calls == ["first"]

    def test_document_of_detached_element(self):
        assert Element().document is None
        document = Document(10, 10)
        assert document.body.document is document
