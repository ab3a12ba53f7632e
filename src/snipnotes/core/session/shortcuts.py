"""Key hints shown in the status line and the help popup."""

from snipnotes.models.note import Focus, Mode

Shortcut = tuple[str, str]

COMMON_SHORTCUTS: tuple[Shortcut, ...] = (
    ("Tab", "Switch focus"),
    ("q", "Quit"),
    ("h", "Help"),
    ("Ctrl+←/→", "Resize panel"),
)

_FOCUS_SHORTCUTS: dict[Focus, tuple[Shortcut, ...]] = {
    Focus.SECTIONS: (
        ("a", "Add section"),
        ("d", "Delete section"),
        ("e", "Edit section"),
        ("Enter", "Open details"),
    ),
    Focus.DETAILS: (
        ("a", "Add detail"),
        ("d", "Delete detail"),
        ("e", "Edit detail"),
        ("v/Enter", "View detail"),
    ),
    Focus.SEARCH: (
        ("Enter", "Search"),
        ("Esc", "Cancel search"),
    ),
}

_MODE_SHORTCUTS: dict[Mode, tuple[Shortcut, ...]] = {
    Mode.ADDING: (
        ("Tab", "Next field"),
        ("Ctrl+S", "Save"),
        ("Ctrl+L", "Language"),
        ("Esc", "Cancel"),
    ),
    Mode.VIEWING: (
        ("Tab", "Next field"),
        ("Ctrl+C", "Copy"),
        ("e", "Edit"),
        ("Esc", "Close"),
    ),
    Mode.SEARCHING: (
        ("Tab", "Change target"),
        ("↑/↓", "Select result"),
        ("Enter", "Open"),
        ("Esc", "Cancel"),
    ),
    Mode.HELP: (("Esc", "Close help"),),
    Mode.EXPORTING: (
        ("↑/↓", "Choose format"),
        ("Enter", "Export"),
        ("Esc", "Cancel"),
    ),
}
_MODE_SHORTCUTS[Mode.EDITING] = _MODE_SHORTCUTS[Mode.ADDING]


def shortcuts_for(focus: Focus, mode: Mode = Mode.NORMAL) -> list[Shortcut]:
    """Return the shortcuts relevant to the current mode and focus."""
    if mode is not Mode.NORMAL:
        return list(_MODE_SHORTCUTS[mode])
    return [*COMMON_SHORTCUTS, *_FOCUS_SHORTCUTS[focus]]


def help_lines() -> list[str]:
    """Return the full key reference for the help popup."""
    lines = ["General"]
    lines += [f"  {key:<10} {action}" for key, action in COMMON_SHORTCUTS]
    lines += [
        f"  {'x':<10} Export",
        f"  {'s, /':<10} Search",
        "",
    ]
    for focus, title in ((Focus.SECTIONS, "Sections"), (Focus.DETAILS, "Details")):
        lines.append(title)
        lines += [f"  {key:<10} {action}" for key, action in _FOCUS_SHORTCUTS[focus]]
        lines.append("")
    lines.append("Editing")
    lines += [f"  {key:<10} {action}" for key, action in _MODE_SHORTCUTS[Mode.ADDING]]
    lines += [
        f"  {'Shift+Tab':<10} Previous field",
        f"  {'Ctrl+C/X/V':<10} Copy / cut / paste",
        f"  {'Ctrl+A':<10} Select all",
        "",
        "Search",
    ]
    lines += [f"  {key:<10} {action}" for key, action in _MODE_SHORTCUTS[Mode.SEARCHING]]
    return lines
