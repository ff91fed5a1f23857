"""
Artisan faults (classified errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Classification
- grammar and binder failures (too few/too many arguments, unknown option,
  malformed signature) are terminal for the current invocation.
- an unresolved command is only raised once the suggestion fallback found nothing.

Integration
- the core raises faults directly; the application boundary calls
  trigger(fault, **ctx) which either re-raises (shell=False) or renders the fault
  through rich and exits with status 1 (shell=True).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNRESOLVED_COMMAND
    - options (1111x)
      • UNKNOWN_OPTION
    - arguments (1112x)
      • TOO_FEW_ARGUMENTS, TOO_MANY_ARGUMENTS
    - definitions (1115x)
      • MALFORMED_SIGNATURE, INVALID_COMMAND

    normalize() lets the host remap codes to custom labels while keeping them stable.
    """
    # --- routing errors (11xxx) ---
    UNRESOLVED_COMMAND          = 11101

    # --- option errors (11xxx) ---
    UNKNOWN_OPTION              = 11112

    # --- argument errors (11xxx) ---
    TOO_FEW_ARGUMENTS           = 11121
    TOO_MANY_ARGUMENTS          = 11122

    # --- definition errors (11xxx) ---
    MALFORMED_SIGNATURE         = 11151
    INVALID_COMMAND             = 11152

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base class of every classified fault.

    options
    - title, code, hint: header, fault code and the single actionable hint.
    - prog: program name shown in the header (defaults to "artisan").
    - colorful, fancy: rendering switches (plain text when colorful is false,
      panel chrome when fancy is true).
    - shell: when true, __trigger__ prints and exits instead of raising.
    - any other key is kept as context (tokens, field, base, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(self.options.get("prog", "artisan"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(_message(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def _message(fault, /):
    return fault.message if fault.message is not Unset else ""


class UnresolvedCommandError(CommandException): ...
class UnknownOptionError(CommandException): ...
class TooFewArgumentsError(CommandException): ...
class TooManyArgumentsError(CommandException): ...
class MalformedSignatureError(CommandException): ...
class InvalidCommandError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnresolvedCommandError",
    "UnknownOptionError",
    "TooFewArgumentsError",
    "TooManyArgumentsError",
    "MalformedSignatureError",
    "InvalidCommandError",
    "FaultCode",
    "trigger",
    "getdoc",
)
