"""
A small element tree that plays the part of the page for the tracker.

Elements have a parent, children, a class list, inline styles and a box.
Boxes are laid out the way CSS positions them, reduced to what dragging
needs:

* ``static`` elements sit at their parent's origin plus their ``x``/``y``
  flow offset,
* ``relative`` elements are shifted from there by ``left``/``top``,
* ``absolute`` elements sit at ``left``/``top`` from the origin of their
  containing block (the nearest non-static ancestor, or the root), and
  fall back to their static place on an axis that has no left/top value,
* ``fixed`` elements are placed from the viewport origin.

Style values come from the inline ``style`` dict, then from the document's
stylesheet rules (the last matching rule wins).

Events are dispatched from the document down to the target's parent
(capture), at the target, then back up to the document (bubble).
"""

import logging
import re
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ..utils.gesture_utils import Rect

logger = logging.getLogger(__name__)

STATIC = "static"

CAPTURING_PHASE = 1
AT_TARGET = 2
BUBBLING_PHASE = 3

_SELECTOR_TOKEN = re.compile(r'(\*|[#.]?[-\w]+)')


class _Listener:
    """One registration of a callback on an event target."""

    __slots__ = ('callback', 'capture', 'passive', 'removed')

    def __init__(self, callback: Callable, capture: bool, passive: bool):
        self.callback = callback
        self.capture = capture
        self.passive = passive
        self.removed = False


class EventTarget:
    """Anything listeners can be attached to."""

    def __init__(self):
        self._listeners: Dict[str, List[_Listener]] = {}

    def add_listener(self, event_type: str, listener: Callable,
                     capture: bool = False, passive: bool = False):
        """Register a listener. Registering the same callback twice is ignored."""
        entries = self._listeners.setdefault(event_type, [])
        for entry in entries:
            if entry.callback is listener and entry.capture == capture:
                return
        entries.append(_Listener(listener, capture, passive))

    def remove_listener(self, event_type: str, listener: Callable, capture: bool = False):
        """Unregister a listener.

        Matching is by identity: an equivalent but newly created function
        does not remove the original. Removing an unknown listener does
        nothing.
        """
        entries = self._listeners.get(event_type, [])
        for index, entry in enumerate(entries):
            if entry.callback is listener and entry.capture == capture:
                # Flag it so an ongoing dispatch skips it too
                entry.removed = True
                del entries[index]
                return

    def has_listener(self, event_type: str, listener: Callable, capture: bool = False) -> bool:
        return any(
            entry.callback is listener and entry.capture == capture
            for entry in self._listeners.get(event_type, [])
        )

    def listener_count(self, event_type: Optional[str] = None) -> int:
        """Number of registered listeners, for one event type or for all."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(entries) for entries in self._listeners.values())

    def _invoke(self, event, phase: int):
        entries = self._listeners.get(event.type)
        if not entries:
            return

        event.current_target = self
        for entry in list(entries):
            if entry.removed:
                continue
            if phase == CAPTURING_PHASE and not entry.capture:
                continue
            if phase == BUBBLING_PHASE and entry.capture:
                continue

            event._in_passive_listener = entry.passive
            try:
                entry.callback(event)
            finally:
                event._in_passive_listener = False


class ClassList:
    """Ordered set of class names on an element."""

    def __init__(self, names=()):
        self._names: List[str] = []
        self.add(*names)

    def add(self, *names: str):
        for name in names:
            if name and name not in self._names:
                self._names.append(name)

    def remove(self, *names: str):
        for name in names:
            if name in self._names:
                self._names.remove(name)

    def contains(self, name: str) -> bool:
        return name in self._names

    def toggle(self, name: str) -> bool:
        if name in self._names:
            self._names.remove(name)
            return False
        self._names.append(name)
        return True

    def replace_all(self, names):
        self._names = []
        self.add(*names)

    def __iter__(self):
        return iter(list(self._names))

    def __len__(self):
        return len(self._names)

    def __contains__(self, name):
        return name in self._names

    def __repr__(self):
        return f"ClassList({self._names!r})"


def parse_px(value) -> Optional[float]:
    """Read a CSS length such as ``"12px"`` or ``12``. Empty values give None."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("px"):
        text = text[:-2]
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Ignoring unparseable length {value!r}")
        return None


def _parse_compound(selector: str):
    """Split ``tag#id.class`` into its parts."""
    text = selector.strip()
    if not text:
        raise ValueError(f"Empty selector in {selector!r}")

    tag, ids, classes = None, [], []
    position = 0
    while position < len(text):
        match = _SELECTOR_TOKEN.match(text, position)
        if not match:
            raise ValueError(f"Unsupported selector {selector!r}")
        token = match.group(1)
        if token.startswith("#"):
            ids.append(token[1:])
        elif token.startswith("."):
            classes.append(token[1:])
        elif position == 0:
            tag = None if token == "*" else token.lower()
        else:
            raise ValueError(f"Unsupported selector {selector!r}")
        position = match.end()
    return tag, ids, classes


class Element(EventTarget):
    """A node in the element tree."""

    def __init__(self, tag: str = "div", classes=(), element_id: Optional[str] = None,
                 x: float = 0, y: float = 0, width: float = 0, height: float = 0,
                 position: str = STATIC):
        super().__init__()
        self.tag = tag.lower()
        self.id = element_id
        self.class_list = ClassList(classes)
        self.style: Dict[str, str] = {}
        if position != STATIC:
            self.style["position"] = position

        # Flow offset inside the parent, and box size
        self.x = x
        self.y = y
        self.width = width
        self.height = height

        self.parent: Optional['Element'] = None
        self.children: List['Element'] = []
        self._document = None

    def __repr__(self):
        label = self.tag
        if self.id:
            label += f"#{self.id}"
        for name in self.class_list:
            label += f".{name}"
        return f"<{label}>"

    # Tree

    def append(self, child: 'Element') -> 'Element':
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: 'Element'):
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    def ancestors(self) -> Iterator['Element']:
        """Parent, grandparent, and so on up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator['Element']:
        """All elements below this one, in tree order."""
        for child in self.children:
            yield child
            yield from child.descendants()

    @property
    def document(self):
        node = self
        while node.parent is not None:
            node = node.parent
        return node._document

    # Classes and selectors

    @property
    def class_name(self) -> str:
        return " ".join(self.class_list)

    @class_name.setter
    def class_name(self, value: str):
        self.class_list.replace_all(value.split())

    def matches(self, selector: str) -> bool:
        """Test against compound selectors, optionally comma-separated."""
        for part in selector.split(","):
            tag, ids, classes = _parse_compound(part)
            if tag is not None and tag != self.tag:
                continue
            if any(wanted != self.id for wanted in ids):
                continue
            if all(self.class_list.contains(name) for name in classes):
                return True
        return False

    def closest(self, selector: str) -> Optional['Element']:
        """This element or its nearest ancestor matching ``selector``."""
        node = self
        while node is not None:
            if node.matches(selector):
                return node
            node = node.parent
        return None

    # Layout

    def get_computed_style(self, name: str):
        """Inline style first, then the last stylesheet rule that matches."""
        value = self.style.get(name)
        if value not in (None, ""):
            return value

        document = self.document
        if document is not None:
            for selector, declarations in reversed(document.stylesheet):
                if name in declarations and self.matches(selector):
                    return declarations[name]
        return None

    @property
    def computed_position(self) -> str:
        return self.get_computed_style("position") or STATIC

    def containing_block(self) -> Optional['Element']:
        """Nearest positioned ancestor, or the root when there is none."""
        last = None
        for ancestor in self.ancestors():
            if ancestor.computed_position != STATIC:
                return ancestor
            last = ancestor
        return last

    def _static_origin(self):
        if self.parent is None:
            return self.x, self.y
        parent_x, parent_y = self.parent._origin()
        return parent_x + self.x, parent_y + self.y

    def _origin(self):
        position = self.computed_position
        left = parse_px(self.get_computed_style("left"))
        top = parse_px(self.get_computed_style("top"))

        if position in ("absolute", "fixed"):
            static_x, static_y = self._static_origin()
            if position == "fixed":
                block_x, block_y = 0, 0
            else:
                block = self.containing_block()
                block_x, block_y = block._origin() if block is not None else (0, 0)
            return (
                block_x + left if left is not None else static_x,
                block_y + top if top is not None else static_y,
            )

        x, y = self._static_origin()
        if position == "relative":
            x += left or 0
            y += top or 0
        return x, y

    def get_bounding_client_rect(self) -> Rect:
        left, top = self._origin()
        return Rect(left, top, self.width, self.height)

    def paint_order(self) -> List['Element']:
        """Children from bottom to top: by ``z-index``, then tree order."""
        return sorted(self.children, key=lambda child: parse_px(child.get_computed_style("z-index")) or 0)


class Document(EventTarget):
    """The top of the tree: holds the root and body, and dispatches events."""

    def __init__(self, width: float = 0, height: float = 0):
        super().__init__()
        self.root = Element("html", width=width, height=height)
        self.root._document = self
        self.body = self.root.append(Element("body", width=width, height=height))
        self.stylesheet: List[Tuple[str, Dict[str, str]]] = []

    def add_rule(self, selector: str, **declarations):
        """Add a style rule. Later rules win over earlier ones."""
        declarations = {name.replace("_", "-"): value for name, value in declarations.items()}
        self.stylesheet.append((selector, declarations))

    @property
    def width(self):
        return self.root.width

    @property
    def height(self):
        return self.root.height

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for element in self.root.descendants():
            if element.id == element_id:
                return element
        return None

    def query_selector_all(self, selector: str) -> List[Element]:
        return [element for element in self.root.descendants() if element.matches(selector)]

    def query_selector(self, selector: str) -> Optional[Element]:
        found = self.query_selector_all(selector)
        return found[0] if found else None

    def element_at(self, x: float, y: float) -> Element:
        """Topmost element under a page position, or the body."""
        hit = self._hit_test(self.body, x, y)
        return hit if hit is not None else self.body

    def _hit_test(self, element: Element, x: float, y: float) -> Optional[Element]:
        for child in reversed(element.paint_order()):
            hit = self._hit_test(child, x, y)
            if hit is not None:
                return hit
        if element.get_bounding_client_rect().contains(x, y):
            return element
        return None

    def dispatch(self, event) -> bool:
        """Deliver an event along its propagation path.

        Returns False if a listener prevented the default action.
        """
        if event.target is None:
            event.target = self.body
        target = event.target

        # Document first, then root down to the target's parent
        path = [self] + list(reversed(list(target.ancestors())))
        event.propagation_stopped = False

        try:
            for node in path:
                node._invoke(event, CAPTURING_PHASE)
                if event.propagation_stopped:
                    return not event.default_prevented

            target._invoke(event, AT_TARGET)
            if event.propagation_stopped:
                return not event.default_prevented

            for node in reversed(path):
                node._invoke(event, BUBBLING_PHASE)
                if event.propagation_stopped:
                    break
        finally:
            event.current_target = None

        return not event.default_prevented
