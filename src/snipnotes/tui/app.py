"""prompt_toolkit front end driving a ``SessionController``."""

from prompt_toolkit import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings, KeyPress, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout.containers import (
    ConditionalContainer,
    Float,
    FloatContainer,
    HSplit,
    VSplit,
    Window,
)
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.styles import Style as PtStyle
from prompt_toolkit.styles import merge_styles
from prompt_toolkit.styles.pygments import style_from_pygments_cls
from prompt_toolkit.widgets import Frame
from pygments.styles import get_style_by_name

from snipnotes.core.session.controller import SessionController
from snipnotes.core.session.keys import Key, KeyEvent
from snipnotes.models.note import Focus, Mode
from snipnotes.tui import render

REFRESH_INTERVAL = 0.25

_NAMED_KEYS: dict[str, KeyEvent] = {
    "c-m": KeyEvent(Key.ENTER),
    "c-j": KeyEvent(Key.ENTER),
    "escape": KeyEvent(Key.ESC),
    "c-i": KeyEvent(Key.TAB),
    "s-tab": KeyEvent(Key.TAB, shift=True),
    "c-h": KeyEvent(Key.BACKSPACE),
    "delete": KeyEvent(Key.DELETE),
    "up": KeyEvent(Key.UP),
    "down": KeyEvent(Key.DOWN),
    "left": KeyEvent(Key.LEFT),
    "right": KeyEvent(Key.RIGHT),
    "home": KeyEvent(Key.HOME),
    "end": KeyEvent(Key.END),
    "pageup": KeyEvent(Key.PAGEUP),
    "pagedown": KeyEvent(Key.PAGEDOWN),
    "s-up": KeyEvent(Key.UP, shift=True),
    "s-down": KeyEvent(Key.DOWN, shift=True),
    "s-left": KeyEvent(Key.LEFT, shift=True),
    "s-right": KeyEvent(Key.RIGHT, shift=True),
    "s-home": KeyEvent(Key.HOME, shift=True),
    "s-end": KeyEvent(Key.END, shift=True),
    "c-left": KeyEvent(Key.LEFT, ctrl=True),
    "c-right": KeyEvent(Key.RIGHT, ctrl=True),
}

STYLE = {
    "": "#e0e0e0 bg:#1e1e1e",
    "frame.border": "#555555",
    "frame.label": "#e0af68 bold",
    "hint": "#777777",
    "cursor": "reverse",
    "selection": "bg:#3e4a5e",
    "item.selected": "bg:#e0af68 #1e1e1e bold",
    "item.marked": "bg:#444444",
    "label": "#aaaaaa",
    "label.focused": "#e0af68 bold",
    "search.target": "bg:#333333 #7aa2f7",
    "search.query": "bold",
    "search.source": "#7aa2f7",
    "link": "#7aa2f7 underline",
    "status": "#8a8a8a bg:#333333",
    "status.key": "#e0af68 bg:#333333 bold",
    "status.message": "#e0af68 bg:#333333",
}


def translate_key(key_press: KeyPress) -> KeyEvent | None:
    """Turn a prompt_toolkit key press into a ``KeyEvent``; None for unhandled keys."""
    key = key_press.key
    name = key.value if isinstance(key, Keys) else key
    if name == Keys.BracketedPaste.value:
        return KeyEvent(Key.PASTE, text=key_press.data)
    event = _NAMED_KEYS.get(name)
    if event is not None:
        return event
    if name.startswith("c-") and len(name) == 3:
        return KeyEvent(name[2], ctrl=True)
    data = key_press.data
    if len(data) == 1 and data.isprintable():
        return KeyEvent(data)
    return None


def _text_window(get_fragments, **kwargs) -> Window:
    return Window(FormattedTextControl(get_fragments), **kwargs)


def _popup(body: Window, title, visible, width: int = 80) -> Float:
    return Float(
        content=ConditionalContainer(
            Frame(body, title=title, width=D(preferred=width)),
            filter=Condition(visible),
        ),
        transparent=False,
    )


def create_app(controller: SessionController) -> Application:
    """Build the full-screen application around ``controller``."""
    kb = KeyBindings()

    @kb.add(Keys.Any)
    @kb.add("escape", eager=True)
    def _dispatch(event: KeyPressEvent) -> None:
        key_event = translate_key(event.key_sequence[0])
        if key_event is None:
            return
        controller.handle_input(key_event)
        controller.check_search_results()
        if controller.should_quit:
            event.app.exit()

    sections_control = FormattedTextControl(
        lambda: render.sections_panel(controller), focusable=True
    )
    sections_window = Window(sections_control, wrap_lines=False)
    panels = VSplit([
        Frame(
            sections_window,
            title=lambda: render.panel_title(controller, Focus.SECTIONS),
            width=lambda: D(weight=controller.left_panel_width),
        ),
        Frame(
            _text_window(lambda: render.details_panel(controller), wrap_lines=False),
            title=lambda: render.panel_title(controller, Focus.DETAILS),
            width=lambda: D(weight=controller.right_panel_width),
        ),
    ])
    body = HSplit([
        Frame(
            _text_window(lambda: render.search_bar(controller), height=1),
            title=lambda: render.panel_title(controller, Focus.SEARCH),
        ),
        panels,
        _text_window(lambda: render.status_line(controller), height=1, style="class:status"),
    ])

    root = FloatContainer(
        content=body,
        floats=[
            _popup(
                _text_window(lambda: render.edit_popup(controller), wrap_lines=False),
                title=lambda: render.popup_title(controller),
                visible=lambda: controller.edit is not None,
                width=100,
            ),
            _popup(
                _text_window(lambda: render.search_results_popup(controller)),
                title="Results",
                visible=lambda: controller.mode is Mode.SEARCHING and bool(
                    controller.search_query
                ),
            ),
            _popup(
                _text_window(lambda: render.help_popup(controller)),
                title="Help",
                visible=lambda: controller.mode is Mode.HELP,
                width=60,
            ),
            _popup(
                _text_window(lambda: render.export_popup(controller)),
                title="Export",
                visible=lambda: controller.mode is Mode.EXPORTING,
                width=60,
            ),
        ],
    )

    def before_render(app: Application) -> None:
        controller.check_search_results()
        rows = app.output.get_size().rows
        controller.page_size = max(3, rows // 5)

    style = merge_styles([
        style_from_pygments_cls(get_style_by_name("monokai")),
        PtStyle.from_dict(STYLE),
    ])

    app = Application(
        layout=Layout(root, focused_element=sections_window),
        key_bindings=kb,
        style=style,
        full_screen=True,
        mouse_support=False,
        refresh_interval=REFRESH_INTERVAL,
        before_render=before_render,
    )
    app.ttimeoutlen = 0.05
    return app


def run(controller: SessionController) -> None:
    """Run the front end until the user quits, then stop the search worker."""
    app = create_app(controller)
    try:
        app.run()
    finally:
        controller.close()
