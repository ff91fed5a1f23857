"""
Artisan command layer: the base class every command derives from.

A command declares a signature and a description as class attributes and
implements handle():

    from artisan import Command

    class MakeUser(Command):
        signature = '''make:user
            { name: the user name }
            { role=member: the user role }
            { --F|force: overwrite an existing user }
        '''
        description = "Create a new user"

        def handle(self):
            self.info(f"created {self.argument('name')} as {self.argument('role')}")

Execution boundary
- setup(arguments, options) receives the bound values of one invocation.
- handle() performs the behavior; it may be a coroutine function, in which case
  the application runs it to completion.
- handle() may prompt, print, and report progress through the helpers below,
  but never re-enters the binder or the resolver.
"""
from abc import ABC, abstractmethod
from types import MappingProxyType

from . import terminal
from .signatures import split_signature
from .utils import Unset


class Command(ABC):
    """
    Base class of all commands.

    Class attributes
    - signature: "base {clause} ..." (required, non-empty).
    - description: one-line summary used by the command list and help.

    Derived
    - base / pattern: the signature split at its first whitespace.
    """

    signature = Unset
    description = ""

    def __init__(self):
        self._arguments = MappingProxyType({})
        self._options = MappingProxyType({})

    @property
    def base(self):
        return split_signature(self.signature)[0]

    @property
    def pattern(self):
        return split_signature(self.signature)[1]

    def setup(self, arguments, options, /):
        """
        Receive the bound arguments and options of the current invocation.
        """
        self._arguments = MappingProxyType(dict(arguments))
        self._options = MappingProxyType(dict(options))

    @abstractmethod
    def handle(self):
        """
        Perform the command action.
        """

    # ── Bound values ────────────────────────────────────────────────────────

    def arguments(self):
        return self._arguments

    def argument(self, name, /):
        try:
            return self._arguments[name]
        except KeyError:
            raise KeyError("argument %r is not registered on signature" % name) from None

    def options(self):
        return self._options

    def option(self, name, /):
        try:
            return self._options[name]
        except KeyError:
            raise KeyError("option %r is not registered on signature" % name) from None

    # ── Prompts ─────────────────────────────────────────────────────────────

    def ask(self, question, /):
        return terminal.ask(question)

    def secret(self, question, /):
        """
        Ask for a value without echoing it (passwords, tokens).
        """
        return terminal.ask(question, password=True)

    def confirm(self, question, /, initial=False):
        return terminal.confirm(question, initial)

    def choice(self, question, options, /, initial=0, multiple=False):
        """
        Prompt to choose one option (or several when multiple is true).
        """
        return terminal.choose(question, options, initial, multiple=multiple)

    def anticipate(self, question, options, /, fallback=None):
        """
        Ask for free text, suggesting options; a unique prefix completes to its
        suggestion and an empty answer yields fallback.
        """
        return terminal.anticipate(question, options, fallback)

    # ── Output ──────────────────────────────────────────────────────────────

    def info(self, message, /):
        terminal.write(message, terminal.styles()["info"])

    def comment(self, message, /):
        terminal.write(message, terminal.styles()["comment"])

    def verbose(self, message, /):
        # only printed when the invocation carries --verbose / -v
        if self._options.get("verbose"):
            terminal.write(message)

    def error(self, message, /):
        terminal.write(message, terminal.styles()["error"], target=terminal.errors)

    def warn(self, message, /):
        terminal.badge("WARNING", message, terminal.styles()["warning-badge"])

    def alert(self, message, /):
        terminal.badge("ALERT", message, terminal.styles()["alert-badge"])

    def table(self, head, rows, /):
        terminal.table(head, rows)

    def with_progress(self, items, processor, /, *, workers=4):
        """
        Process items with bounded parallelism while a progress bar advances.

        The processor may be an `async def`; each call then runs to completion
        in its worker. Returns the processor results in input order.
        """
        return terminal.progress(items, processor, workers=workers)

    def __repr__(self):
        return f"{type(self).__name__}(signature={self.signature!r})"


__all__ = (
    "Command",
)
