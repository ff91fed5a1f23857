"""
Artisan command registry and resolver.

Entries
- Entry(base, pattern, descriptor) is the tagged form of a registered command:
  the descriptor is a Command subclass, validated once when it is registered.

Resolution (resolve(base, registry))
- the first entry whose base equals the requested base wins;
- otherwise every base starting with the requested base is a candidate;
- when nothing starts with it and the base is namespaced ("migrate:foo"), every
  base of the same namespace ("migrate:") is a candidate;
- candidates are returned sorted as Suggestions for the caller to present;
- without candidates the command is unresolved (UnresolvedCommandError).
"""
import logging
from typing import NamedTuple

from .commands import Command
from .faults import InvalidCommandError, UnresolvedCommandError, FaultCode, getdoc
from .signatures import parse_signature, split_signature

logger = logging.getLogger(__name__)


class Entry(NamedTuple):
    base: str
    pattern: str
    descriptor: type

    @property
    def description(self):
        return self.descriptor.description

    def create(self):
        """
        Instantiate a fresh command for one invocation.
        """
        return self.descriptor()


class Suggestions(NamedTuple):
    """
    Sorted bases offered when the requested base has no exact match.
    """
    base: str
    candidates: tuple


def _invalid(descriptor, message, /):
    return InvalidCommandError(
        message,
        title="invalid command",
        code=FaultCode.INVALID_COMMAND,
        hint="declare a non-empty signature, e.g. signature = \"make:user {name}\"",
        descriptor=descriptor,
        docs=getdoc(FaultCode.INVALID_COMMAND),
    )


def entry(descriptor, /):
    """
    Validate a command class and build its registry entry.

    Raises
    - InvalidCommandError: not a Command subclass, or missing/empty signature.
    - MalformedSignatureError: the pattern does not parse.
    """
    if not isinstance(descriptor, type) or not issubclass(descriptor, Command):
        raise _invalid(descriptor, "%r is not a command class" % (descriptor,))
    signature = descriptor.signature
    if not isinstance(signature, str) or not signature.strip():
        raise _invalid(descriptor, "signature required in command %r" % descriptor.__qualname__)

    base, pattern = split_signature(signature)
    parse_signature(pattern)
    return Entry(base, pattern, descriptor)


class Registry:
    """
    Ordered collection of command entries keyed by base.

    Bases are unique; registering a second command under the same base raises
    ValueError.
    """

    def __init__(self, descriptors=(), /):
        self._entries = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor, /):
        """
        Register a command class; usable as a class decorator.
        """
        new = entry(descriptor)
        if (old := self._entries.setdefault(new.base, new)) is not new:
            if old.descriptor is descriptor:
                return descriptor
            raise ValueError(f"registry base {new.base!r} is already in use by {old.descriptor.__qualname__}")
        logger.debug("registered command %r (%s)", new.base, descriptor.__qualname__)
        return descriptor

    def get(self, base, default=None, /):
        return self._entries.get(base, default)

    def __getitem__(self, base):
        return self._entries[base]

    def __contains__(self, base):
        return base in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"registry({", ".join(map(repr, self._entries))})"


def suggest(base, bases, /):
    """
    Return the sorted candidate bases for a base that has no exact match.
    """
    candidates = [candidate for candidate in bases if candidate.startswith(base)]
    if not candidates and ":" in base:
        namespace = base[:base.rindex(":") + 1]
        candidates = [candidate for candidate in bases if candidate.startswith(namespace)]
    return tuple(sorted(candidates))


def resolve(base, registry, /):
    """
    Resolve a requested base against a registry.

    Returns
    - Entry on exact match.
    - Suggestions when only prefix (or namespace) matches exist.

    Raises
    - UnresolvedCommandError when there is nothing to suggest.
    """
    entries = list(registry)
    for candidate in entries:
        if candidate.base == base:
            return candidate

    if candidates := suggest(base, [candidate.base for candidate in entries]):
        logger.debug("no command %r, suggesting %s", base, ", ".join(candidates))
        return Suggestions(base, candidates)

    raise UnresolvedCommandError(
        "no command found for %r" % base,
        title="unresolved command",
        code=FaultCode.UNRESOLVED_COMMAND,
        hint="run 'list' to see the available commands",
        base=base,
        docs=getdoc(FaultCode.UNRESOLVED_COMMAND),
    )


__all__ = (
    "Entry",
    "Suggestions",
    "Registry",
    "entry",
    "suggest",
    "resolve",
)
