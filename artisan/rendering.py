"""
Artisan renderers: banner, command list, and command help.

Palette keys
- banner, banner-border
- section-label, command-name, command-description
- argument-name, option-name, description, missing-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed entirely.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .signatures import parse_descriptions, parse_signature


def _palette(colorful, /):
    styles = defaultdict(str, {
        "banner": "bold #FF4D94",  # magenta branding
        "banner-border": "#4B5563",  # slate border
        "section-label": "bold #FFD600",  # amber section headers
        "command-name": "bold #22C55E",  # green names
        "command-description": "#D1D5DB",
        "argument-name": "bold #22C55E",
        "option-name": "bold #00E6FF",
        "description": "#9CA3AF",
        "missing-description": "#737373 italic",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _grid():
    grid = Table.grid(padding=(0, 4))
    grid.add_column(no_wrap=True)
    grid.add_column()
    return grid


def banner(name, /, *, colorful=True):
    styler = _palette(colorful)
    return Panel(
        Text(name, styler("banner"), justify="center"),
        box=ROUNDED,
        border_style=styler("banner-border"),
        expand=False,
        padding=(0, 4),
    )


def command_list(entries, /, *, colorful=True):
    """
    Render "Available Commands" with each base and its description.
    """
    styler = _palette(colorful)
    grid = _grid()
    for entry in sorted(entries, key=lambda entry: entry.base):
        grid.add_row(Text(entry.base, styler("command-name")), Text(entry.description or "", styler("command-description")))
    return Group(Text("Available Commands:", styler("section-label")), Text(""), grid)


def command_help(command, pattern, /, *, colorful=True, fancy=False):
    """
    Render the help of a command from its pattern (global options included).

    Sections
    - Description: the command description.
    - Arguments: positional names and their descriptions (omitted when empty).
    - Options: aliases and long names ("-F, --force") and their descriptions.
    """
    styler = _palette(colorful)
    parsed = parse_signature(pattern)
    descriptions = parse_descriptions(pattern)

    def describe(description):
        if description is None:
            return Text("")
        return Text(description, styler("description"))

    renders = [
        Text("Description:", styler("section-label")),
        Text("  " + (command.description or ""), styler("command-description")),
        Text(""),
    ]

    if descriptions.arguments:
        grid = _grid()
        for name, description in descriptions.arguments.items():
            label = name + "..." if parsed.arguments[name].variadic else name
            grid.add_row(Text("  " + label, styler("argument-name")), describe(description))
        renders.extend((Text("Arguments:", styler("section-label")), grid, Text("")))

    grid = _grid()
    for name, description in descriptions.options.items():
        field = parsed.options[name]
        label = f"--{name}" + ("=" if field.valued else "")
        if field.short is not None and field.short != name:
            label = f"-{field.short}, {label}"
        elif field.short == name:
            label = f"-{name}"
        grid.add_row(Text("  " + label, styler("option-name")), describe(description))
    renders.extend((Text("Options:", styler("section-label")), grid))

    if fancy:
        return Panel(Group(*renders), title=Text(command.base, styler("command-name")), title_align="left")
    return Group(*renders)


__all__ = (
    "banner",
    "command_list",
    "command_help",
)
