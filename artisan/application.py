"""
Artisan application: the process boundary that resolves and runs commands.

Flow
- parse(argv): without a base, print the banner and the command list;
  otherwise call(base, tokens). Classified faults raised on the way are
  surfaced through trigger() with the configured shell/colorful/fancy flags.
- call(base, tokens): core commands ("list", "cache") first, then the
  registry resolver. Suggestions are offered through the chooser; when nothing
  is chosen, nothing runs.
- exec(command, tokens): help interception (--help / -h), binding against the
  command pattern merged with the global options, setup(), then handle().

The registry is built lazily from the configuration on first use and kept for
the lifetime of the application, so discovery touches the filesystem once.
"""
import asyncio
import inspect
import logging
import sys

from rich.logging import RichHandler

from . import discovery, rendering, terminal
from .binding import bind
from .config import Config, configure
from .faults import CommandException, trigger
from .registry import Registry, Suggestions, resolve
from .signatures import parse_signature
from .utils import Unset, coalesce

logger = logging.getLogger("artisan")

GLOBAL_OPTIONS = """
    { --h|help: Show help of a command }
    { --v|verbose: Get verbose output }
"""

HELP_TOKENS = frozenset({"--help", "-h"})


def prompt_suggestions(suggestions, /):
    """
    Default chooser: ask the user to pick one of the suggested bases.
    """
    return terminal.choose(
        "Command %r is not defined. Did you mean one of these?" % suggestions.base,
        suggestions.candidates,
    )


def _verbose_logging():
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return
    handler = RichHandler(console=terminal.errors, show_path=False)
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


class Artisan:
    """
    Command-line application bound to an immutable configuration.

    Parameters
    - config: Config | Unset (defaults to configure()).
    - registry: Registry | Unset; when Unset it is loaded from the configuration
      (command targets + cached paths) on first access.
    - chooser: callable(Suggestions) -> base | None used to pick among suggestions.
    """

    def __init__(self, config=Unset, /, registry=Unset, *, chooser=Unset):
        if not isinstance(config, Config | Unset):
            raise TypeError("Artisan 'config' must be a config")
        if not isinstance(registry, Registry | Unset):
            raise TypeError("Artisan 'registry' must be a registry")
        self._config = configure() if config is Unset else config
        self._registry = registry
        self._chooser = coalesce(chooser, prompt_suggestions)

    @property
    def config(self):
        return self._config

    @property
    def registry(self):
        if self._registry is Unset:
            self._registry = discovery.load_registry(self._config)
        return self._registry

    def command(self, descriptor, /):
        """
        Register a command class on this application; usable as a class decorator.
        """
        return self.registry.register(descriptor)

    def parse(self, argv=Unset, /):
        """
        Run the application for argv (defaults to sys.argv[1:]).
        """
        argv = list(sys.argv[1:] if argv is Unset else argv)
        try:
            if not argv:
                terminal.console.print(rendering.banner(self._config.name, colorful=self._config.colorful))
                terminal.console.print()
                self.show_list()
                return
            base, *tokens = argv
            return self.call(base, tokens)
        except CommandException as fault:
            trigger(
                fault,
                prog=self._config.name,
                shell=self._config.shell,
                colorful=self._config.colorful,
                fancy=self._config.fancy,
            )

    def call(self, base, tokens=(), /):
        """
        Resolve a base and execute the matching (or chosen) command.
        """
        if base == "list":
            return self.show_list()
        if base == "cache":
            return self.cache()

        entry = resolve(base, self.registry)
        if isinstance(entry, Suggestions):
            if not (chosen := self._chooser(entry)):
                logger.debug("no suggestion chosen for %r", base)
                return
            entry = self.registry[chosen]

        return self.exec(entry.create(), tokens)

    def exec(self, command, tokens=(), /):
        """
        Bind tokens to a command and run it; --help / -h renders help instead.
        """
        tokens = list(tokens)
        if HELP_TOKENS.intersection(tokens):
            return self.show_help(command)

        bound = bind(parse_signature(GLOBAL_OPTIONS + command.pattern), tokens)
        if bound.options["verbose"]:
            _verbose_logging()
        logger.debug("running %r with %r", command.base, tokens)

        command.setup(bound.arguments, bound.options)
        result = command.handle()
        if inspect.iscoroutine(result):
            result = asyncio.run(result)
        return result

    def cache(self):
        """
        Discover command files from the load directories and cache their paths.
        """
        paths = discovery.cache_commands(self._config)
        terminal.write("cached %d command file(s) in %s" % (len(paths), self._config.cache),
                       terminal.styles()["info"])
        return paths

    def show_list(self):
        terminal.console.print(rendering.command_list(self.registry, colorful=self._config.colorful))

    def show_help(self, command, /):
        terminal.console.print(rendering.command_help(
            command,
            GLOBAL_OPTIONS + command.pattern,
            colorful=self._config.colorful,
            fancy=self._config.fancy,
        ))


__all__ = (
    "GLOBAL_OPTIONS",
    "Artisan",
    "prompt_suggestions",
)
