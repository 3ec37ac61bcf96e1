"""Retained GUI components: layout, stacking order, hit testing and dragging."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from goldfish.graphic import Color, Dimension, fill_rect
from goldfish.input import InputState

NO_PARENT = -1
BACKGROUND = -2

BORDER_WIDTH = 2.0
BORDER_COLOR_DIFF = 48

_GRIP_SPACING = 5.0
_GRIP_SIZE = 18.0
_MIN_RESIZE = 20 + 10 + _GRIP_SIZE

Rect = Tuple[float, float, float, float]
Hook = Callable[["Gui", "Component"], None]


class ComponentType(enum.Enum):
    """Kinds of GUI component."""

    BUTTON = enum.auto()
    FRAME = enum.auto()
    PROGRESS = enum.auto()
    RANGE = enum.auto()
    SCROLLBAR = enum.auto()
    TAB = enum.auto()
    TEXT = enum.auto()
    WINDOW = enum.auto()


@dataclass(eq=False)
class Component:
    """One GUI element; ``parent`` is -1 for a top-level component."""

    key: int
    type: ComponentType
    x: float
    y: float
    width: float
    height: float
    font: Color
    hover_font: Color
    parent: int = NO_PARENT
    pressed: bool = False
    props: Dict[str, Any] = field(default_factory=dict)
    callback: Optional[Callable[..., Any]] = None
    text: Optional[str] = None
    texture: Any = None
    on_render: Optional[Hook] = None
    on_drag: Optional[Hook] = None
    on_click: Optional[Hook] = None


def _shift(color: Color, amount: float) -> Color:
    return Color(color.r + amount, color.g + amount, color.b + amount, color.a)


class Gui:
    """A set of components drawn on a renderer and driven by mouse input."""

    def __init__(
        self,
        renderer: Any,
        width: float,
        height: float,
        input_state: Optional[InputState] = None,
    ) -> None:
        self.renderer = renderer
        self.width = width
        self.height = height
        self.input = input_state if input_state is not None else InputState()
        self.area: List[Component] = []
        self.pressed = NO_PARENT
        self.hover = NO_PARENT
        self.button_sound: Optional[str] = None
        self.base = Color(80, 88, 64, 255)
        self.font = Color(256 - 32, 256 - 32, 256 - 32, 255)
        self._kinds: Dict[str, Callable[..., int]] = {}

    # -- creation and lookup -------------------------------------------------

    def register_kind(self, name: str, handler: Callable[..., int]) -> None:
        """Register ``handler(gui, x, y, w, h) -> id`` under ``name``."""
        self._kinds[name] = handler

    def create(self, name: str, x: float, y: float, w: float, h: float) -> int:
        """Create a component of a registered kind and return its id."""
        try:
            handler = self._kinds[name]
        except KeyError:
            raise KeyError(f"unknown component kind: {name!r}") from None
        return handler(self, x, y, w, h)

    def create_component(
        self, kind: ComponentType, x: float, y: float, w: float, h: float
    ) -> Component:
        """Add a component with the lowest free id and return it."""
        used = {c.key for c in self.area}
        key = 0
        while key in used:
            key += 1
        component = Component(
            key=key,
            type=kind,
            x=x,
            y=y,
            width=w,
            height=h,
            font=self.font,
            hover_font=self.font,
        )
        self.area.append(component)
        return component

    def index_of(self, id: int) -> Optional[int]:
        """Position of component ``id`` in drawing order, or None."""
        return next((i for i, c in enumerate(self.area) if c.key == id), None)

    def _find(self, id: int) -> Optional[Component]:
        return next((c for c in self.area if c.key == id), None)

    def _require(self, id: int) -> Component:
        component = self._find(id)
        if component is None:
            raise KeyError(f"no such component: {id}")
        return component

    # -- destruction -----------------------------------------------------------

    def destroy(self, id: int) -> None:
        """Remove a component and all of its descendants."""
        component = self._find(id)
        if component is None:
            return
        while True:
            child = next(
                (c for c in self.area if c.parent == id and c is not component), None
            )
            if child is None:
                break
            self.destroy(child.key)

        if component.props.get("active"):
            for other in reversed(self.area):
                if other.parent == NO_PARENT and other.key != id:
                    other.props["active"] = 1
                    break

        component.texture = None
        component.text = None
        component.props.clear()
        self.area.remove(component)

    def destroy_all(self) -> None:
        """Remove every component."""
        while self.area:
            self.destroy(self.area[0].key)

    def set_button_sound(self, path: str) -> None:
        """Set the sound played by buttons."""
        self.button_sound = path

    # -- drawing helpers -------------------------------------------------------

    def draw_box(self, mul: int, x: float, y: float, w: float, h: float) -> None:
        """Draw a bevelled box; ``mul`` sets the bevel direction and strength."""
        diff = mul * BORDER_COLOR_DIFF
        fill_rect(self.renderer, x, y, w, h, _shift(self.base, diff))
        self.renderer.fill_polygon(
            _shift(self.base, -diff),
            Dimension.D2,
            [
                (x + w, y + h),
                (x + w, y),
                (x + w - BORDER_WIDTH, y + BORDER_WIDTH),
                (x + BORDER_WIDTH, y + h - BORDER_WIDTH),
                (x, y + h),
            ],
        )
        fill_rect(
            self.renderer,
            x + BORDER_WIDTH,
            y + BORDER_WIDTH,
            w - BORDER_WIDTH * 2,
            h - BORDER_WIDTH * 2,
            self.base,
        )

    # -- geometry --------------------------------------------------------------

    def _geometry(self, component: Component) -> Tuple[Rect, Rect]:
        """Absolute rectangle of ``component`` and its clip rectangle."""
        bx = by = 0.0
        has_parent = component.parent != NO_PARENT
        if has_parent:
            pw = ph = 0.0
            parent = self._find(component.parent)
            if parent is not None:
                (bx, by, pw, ph), _ = self._geometry(parent)
        else:
            pw, ph = self.width, self.height

        x = bx
        mul = 1
        if component.props.get("x-base") == 1:
            x += pw - component.width
            mul = -1
        x += mul * component.x

        y = by
        mul = 1
        if component.props.get("y-base") == 1:
            y += ph - component.height
            mul = -1
        y += mul * component.y

        w = max(0.0, component.width)
        h = max(0.0, component.height)
        cw = pw if has_parent and pw < w else w
        ch = ph if has_parent and ph < h else h
        return (x, y, w, h), (x, y, cw, ch)

    def calc_geometry(self, component: Component) -> Rect:
        """Absolute ``(x, y, w, h)`` of a component on screen."""
        return self._geometry(component)[0]

    def is_hidden(self, id: int) -> bool:
        """True if the component or one of its ancestors has ``hide`` set."""
        seen: Set[int] = set()
        component = self._find(id)
        while component is not None and component.key not in seen:
            if component.props.get("hide"):
                return True
            seen.add(component.key)
            component = self._find(component.parent)
        return False

    # -- frame -----------------------------------------------------------------

    def render(self) -> None:
        """Handle mouse input for this frame and draw every visible component."""
        mouse = self.input
        left = mouse.left_pressed()
        mx, my = mouse.mouse_x, mouse.mouse_y
        mouse_known = mx != -1 and my != -1
        self.hover = NO_PARENT

        for c in reversed(list(self.area)):
            ignore = bool(c.props.get("ignore-mouse")) or self.is_hidden(c.key)
            cx, cy, cw, ch = self.calc_geometry(c)
            inside = mouse_known and cx <= mx <= cx + cw and cy <= my <= cy + ch
            if not ignore and inside and self.pressed == NO_PARENT and left:
                self.pressed = c.key
                self.hover = c.key
                c.props["clicked-x"] = int(mx)
                c.props["clicked-y"] = int(my)
                c.props["diff-x"] = int(mx - cx)
                c.props["diff-y"] = int(my - cy)
                if c.props.get("resizable"):
                    c.props["old-width"] = int(cw)
                    c.props["old-height"] = int(ch)
            elif not ignore and inside and self.hover == NO_PARENT:
                self.hover = c.key
            elif self.pressed == NO_PARENT:
                c.pressed = False
                c.props.pop("cancel-drag", None)
                c.props.setdefault("min-width", 0)
                c.props.setdefault("min-height", 0)

        if self.pressed == NO_PARENT and left:
            self.pressed = BACKGROUND

        for c in list(self.area):
            if self.is_hidden(c.key):
                continue
            (cx, cy, cw, ch), clip = self._geometry(c)
            self.renderer.clip_push(*clip)
            self.renderer.clip_push(cx, cy, cw, ch)
            if c.on_render is not None:
                c.on_render(self, c)
            self.renderer.clip_pop()
            self.renderer.clip_pop()
            if c.props.get("resizable"):
                self._draw_grip(cx, cy, cw, ch)

        if self.pressed != NO_PARENT and left:
            self._drag()

        if self.pressed != NO_PARENT and not left:
            component = self._find(self.pressed)
            if component is not None and component.on_click is not None:
                component.on_click(self, component)
            self.pressed = NO_PARENT

    def _draw_grip(self, cx: float, cy: float, cw: float, ch: float) -> None:
        sp = _GRIP_SPACING
        bw = BORDER_WIDTH * 2
        aln = _GRIP_SIZE / 3 - bw
        right = cx + cw - sp
        bottom = cy + ch - sp
        for j in range(3):
            rx = right - j * bw - j * aln
            ry = bottom - j * bw - j * aln
            self.renderer.fill_polygon(
                _shift(self.base, -BORDER_COLOR_DIFF),
                Dimension.D2,
                [(right, ry - bw), (rx - bw, bottom), (rx - bw / 2.0, bottom), (right, ry - bw / 2.0)],
            )
            self.renderer.fill_polygon(
                _shift(self.base, BORDER_COLOR_DIFF),
                Dimension.D2,
                [(right, ry - bw / 2.0), (rx - bw / 2.0, bottom), (rx, bottom), (right, ry)],
            )

    def _drag(self) -> None:
        c = self._find(self.pressed)
        if c is None:
            return
        props = c.props
        cancel = False
        if props.get("resizable"):
            c.width = props.get("old-width", c.width)
            c.height = props.get("old-height", c.height)
            cx, cy, cw, ch = self.calc_geometry(c)
            clicked_x = props.get("clicked-x", 0)
            clicked_y = props.get("clicked-y", 0)
            if "cancel-drag" not in props:
                span = _GRIP_SPACING + _GRIP_SIZE
                cancel = (
                    cx + cw - span <= clicked_x <= cx + cw
                    and cy + ch - span <= clicked_y <= cy + ch
                )
                props["cancel-drag"] = int(cancel)
            else:
                cancel = bool(props["cancel-drag"])
            if cancel:
                c.width = self.input.mouse_x - clicked_x + props.get("old-width", 0)
                c.height = self.input.mouse_y - clicked_y + props.get("old-height", 0)
                min_width = props.get("min-width")
                if min_width is not None and c.width < _MIN_RESIZE + min_width:
                    c.width = _MIN_RESIZE + min_width
                min_height = props.get("min-height")
                if min_height is not None and c.height < _MIN_RESIZE + min_height:
                    c.height = _MIN_RESIZE + min_height
        if not cancel and c.on_drag is not None:
            c.on_drag(self, c)
        if c.parent != NO_PARENT or c.type is ComponentType.WINDOW:
            self.move_topmost(c.key)

    # -- attributes ------------------------------------------------------------

    def set_callback(self, id: int, callback: Optional[Callable[..., Any]]) -> None:
        """Set the event callback of a component."""
        component = self._find(id)
        if component is not None:
            component.callback = callback

    def set_parent(self, id: int, parent: int) -> None:
        """Attach a component to ``parent`` (-1 for top level)."""
        component = self._find(id)
        if component is not None:
            component.parent = parent

    def get_parent(self, id: int) -> int:
        """Parent id of a component; -1 for top level or an unknown id."""
        component = self._find(id)
        return NO_PARENT if component is None else component.parent

    def set_text(self, id: int, text: str) -> None:
        """Set the text of a component."""
        component = self._find(id)
        if component is not None:
            component.text = text

    # -- stacking order --------------------------------------------------------

    def _add_tree(self, out: List[Component], parent: int, seen: Set[int]) -> None:
        for c in self.area:
            if c.parent == parent and c.key not in seen:
                seen.add(c.key)
                out.append(c)
                self._add_tree(out, c.key, seen)

    def _add_root(self, out: List[Component], root: Component, seen: Set[int]) -> None:
        seen.add(root.key)
        out.append(root)
        self._add_tree(out, root.key, seen)

    def sort_components(self) -> None:
        """Put windows above other top-level components, children after parents."""
        ordered: List[Component] = []
        seen: Set[int] = set()
        roots = [c for c in self.area if c.parent == NO_PARENT]
        for wanted_window in (False, True):
            for c in roots:
                if (c.type is ComponentType.WINDOW) == wanted_window:
                    c.props["active"] = 0
                    self._add_root(ordered, c, seen)
        self.area = ordered
        for c in reversed(self.area):
            if c.parent == NO_PARENT:
                c.props["active"] = 1
                break

    def move_topmost(self, id: int) -> None:
        """Raise the top-level tree containing ``id`` above all others."""
        ordered: List[Component] = []
        seen: Set[int] = set()
        for c in self.area:
            if c.parent == NO_PARENT and c.key != id:
                c.props["active"] = 0
                self._add_root(ordered, c, seen)
        target = self._find(id)
        if target is not None and target.parent == NO_PARENT:
            target.props["active"] = 1
            self._add_root(ordered, target, seen)
        self.area = ordered

        component = self._find(id)
        if component is None or component.parent == NO_PARENT:
            return
        visited: Set[int] = {component.key}
        while True:
            root_id = component.parent
            parent = self._find(root_id)
            if parent is None or parent.key in visited:
                return
            visited.add(parent.key)
            component = parent
            if component.parent == NO_PARENT:
                break
        self.move_topmost(root_id)

    # -- properties ------------------------------------------------------------

    def set_prop_id(self, id: int, key: str, other: int) -> None:
        """Store another component's id under ``key``."""
        component = self._find(id)
        if component is not None:
            component.props[key] = other

    def get_prop_id(self, id: int, key: str) -> Optional[int]:
        """Component id stored under ``key``, or None."""
        component = self._find(id)
        if component is None:
            return None
        return component.props.get(key)

    def get_props(self, id: int) -> Optional[Dict[str, Any]]:
        """The property mapping of a component, or None for an unknown id."""
        component = self._find(id)
        return None if component is None else component.props

    def set_font_color(self, id: int, color: Color) -> None:
        """Set the text color of a component."""
        component = self._find(id)
        if component is not None:
            component.font = color

    def get_font_color(self, id: int) -> Color:
        """Text color of a component; the GUI default for an unknown id."""
        component = self._find(id)
        return self.font if component is None else component.font

    def set_hover_font_color(self, id: int, color: Color) -> None:
        """Set the hover text color of a component."""
        component = self._find(id)
        if component is not None:
            component.hover_font = color

    def get_hover_font_color(self, id: int) -> Color:
        """Hover text color of a component; the GUI default for an unknown id."""
        component = self._find(id)
        return self.font if component is None else component.hover_font

    def set_wh(self, id: int, w: float, h: float) -> None:
        """Set the size of a component."""
        component = self._find(id)
        if component is not None:
            component.width = w
            component.height = h

    def get_wh(self, id: int) -> Tuple[float, float]:
        """Size of a component."""
        component = self._require(id)
        return component.width, component.height

    def set_xy(self, id: int, x: float, y: float) -> None:
        """Set the position of a component."""
        component = self._find(id)
        if component is not None:
            component.x = x
            component.y = y

    def get_xy(self, id: int) -> Tuple[float, float]:
        """Position of a component."""
        component = self._require(id)
        return component.x, component.y