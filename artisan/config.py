"""
Artisan configuration: an immutable value passed to the application at startup.

Fields
- name: program name shown in the banner and in fault headers.
- root: project root; relative command paths, load directories and the cache
  file are resolved against it.
- cache: location of the JSON file listing discovered command files.
- load: directories scanned for command files by the `cache` core command.
- commands: extra command targets, either `.py` paths or dotted module names.
- shell: render faults and exit with status 1 instead of raising them.
- colorful / fancy: fault and help rendering switches.

Use configure() to build or derive a configuration; instances are never
mutated in place (copy.replace works too, since Config is a named tuple).
"""
import os.path
from collections.abc import Iterable
from typing import NamedTuple

from .utils import Unset, coalesce


class Config(NamedTuple):
    name: str = "Artisan"
    root: str = "."
    cache: str = "artisan.json"
    load: tuple = ()
    commands: tuple = ()
    shell: bool = True
    colorful: bool = True
    fancy: bool = False

    def resolve(self, *paths):
        """
        Join paths onto the absolute project root.
        """
        return os.path.join(os.path.abspath(self.root), *paths)


def _string(name, value, /):
    if not isinstance(value, str):
        raise TypeError(f"config {name!r} must be a string")
    if not (value := value.strip()):
        raise ValueError(f"config {name!r} cannot be empty")
    return value


def _strings(name, values, /):
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise TypeError(f"config {name!r} must be an iterable of strings")
    return tuple(_string(name, value) for value in values)


def configure(config=Unset, /, **overrides):
    """
    Return a validated Config, optionally derived from an existing one.

    >>> configure(name="Shop", load=["commands"]).load
    ('commands',)
    """
    if not isinstance(config, Config | Unset):
        raise TypeError("configure() argument must be a config")
    config = coalesce(config, Config())

    unknown = overrides.keys() - Config._fields
    if unknown:
        raise TypeError("configure() got unexpected options: %s" % ", ".join(sorted(unknown)))

    options = config._asdict() | overrides
    for name in ("name", "root", "cache"):
        options[name] = _string(name, options[name])
    for name in ("load", "commands"):
        options[name] = _strings(name, options[name])
    for name in ("shell", "colorful", "fancy"):
        if not isinstance(options[name], bool):
            raise TypeError(f"config {name!r} must be a boolean")

    return Config(**options)


__all__ = (
    "Config",
    "configure",
)
