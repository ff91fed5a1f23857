"""
Artisan command discovery and path caching.

Targets
- a path ending in ".py" (relative to the project root or absolute) is imported
  as a standalone module;
- anything else is a dotted module name ("app.commands.users") imported as is.

Caching
- cache_commands(config) scans every `load` directory once, keeps the files that
  define at least one command, and writes their absolute paths as JSON to the
  cache file. cached_paths(config) reads that list back; a missing or unreadable
  cache simply means "nothing cached yet".
"""
import functools
import hashlib
import importlib
import importlib.util
import inspect
import json
import logging
import os
import sys

from .commands import Command
from .faults import InvalidCommandError, FaultCode, getdoc
from .registry import Registry

logger = logging.getLogger(__name__)


def load_file(path, /):
    """
    Import a Python file as a module (cached per absolute path in sys.modules).
    """
    path = os.path.abspath(path)
    name = "_artisan_command_%s" % hashlib.sha1(path.encode()).hexdigest()[:12]
    try:
        return sys.modules[name]
    except KeyError:
        pass

    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"unable to import command file {path!r}", path=path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[name]
        raise
    logger.debug("loaded command file %s", path)
    return module


def command_classes(module, /):
    """
    Return the concrete Command subclasses defined in (not imported into) a module.
    """
    classes = []
    for name, object in inspect.getmembers(module, inspect.isclass):
        if (
            issubclass(object, Command) and
            object is not Command and
            object.__module__ == module.__name__ and
            not inspect.isabstract(object)
        ):
            classes.append(object)
    return classes


def import_target(target, /, *, root="."):
    """
    Import a command target and return its module.

    Raises
    - ImportError when the file or module cannot be imported.
    """
    if target.endswith(".py"):
        return load_file(os.path.join(root, target))
    try:
        return importlib.import_module(target)
    except ImportError as error:
        raise ImportError(f"unable to import command module {target!r}: {error}", name=target) from error


def _load_failure(target, error, /):
    return InvalidCommandError(
        "unable to load commands from %r: %s" % (target, error),
        title="invalid command",
        code=FaultCode.INVALID_COMMAND,
        hint="check the command file and run 'cache' again",
        target=target,
        docs=getdoc(FaultCode.INVALID_COMMAND),
    )


def discover(config, /):
    """
    Scan the configured load directories for command files.

    Returns
    - sorted absolute paths of the files defining at least one command.

    Raises
    - InvalidCommandError when a command file cannot be imported or a
      discovered command has no signature.
    """
    paths = []
    for directory in config.load:
        directory = config.resolve(directory)
        for filename in sorted(os.listdir(directory)):
            if not filename.endswith(".py") or filename.startswith("_"):
                continue
            path = os.path.join(directory, filename)
            try:
                classes = command_classes(load_file(path))
            except (ImportError, OSError) as error:
                raise _load_failure(path, error) from error
            for cls in classes:
                if not isinstance(cls.signature, str) or not cls.signature.strip():
                    raise InvalidCommandError(
                        "signature required in command %r (%s)" % (cls.__qualname__, path),
                        title="invalid command",
                        code=FaultCode.INVALID_COMMAND,
                        hint="declare a non-empty signature, e.g. signature = \"make:user {name}\"",
                        descriptor=cls,
                        path=path,
                        docs=getdoc(FaultCode.INVALID_COMMAND),
                    )
            if classes:
                paths.append(path)
    return paths


def cache_commands(config, /):
    """
    Discover command files and persist their paths to the cache file.
    """
    paths = discover(config)
    destination = config.resolve(config.cache)
    os.makedirs(os.path.dirname(destination), exist_ok=True)
    with open(destination, "w", encoding="utf-8") as file:
        json.dump(paths, file, indent=2)
    logger.debug("cached %d command file(s) in %s", len(paths), destination)
    return paths


def cached_paths(config, /):
    try:
        with open(config.resolve(config.cache), encoding="utf-8") as file:
            paths = json.load(file)
    except FileNotFoundError:
        return []
    except json.JSONDecodeError:
        logger.debug("ignoring unreadable command cache %s", config.resolve(config.cache))
        return []
    if not isinstance(paths, list) or not all(isinstance(path, str) for path in paths):
        logger.debug("ignoring malformed command cache %s", config.resolve(config.cache))
        return []
    return paths


def load_registry(config, /, registry=None):
    """
    Build a registry from the configured command targets and the cached paths.

    Raises
    - InvalidCommandError when a target cannot be imported (a stale cached path
      included) or two commands share a base; the underlying error is chained.
    """
    registry = Registry() if registry is None else registry
    targets = [(target, functools.partial(import_target, target, root=config.resolve())) for target in config.commands]
    targets += [(path, functools.partial(load_file, path)) for path in cached_paths(config)]

    for target, load in targets:
        try:
            for cls in command_classes(load()):
                registry.register(cls)
        except (ImportError, OSError, ValueError) as error:
            raise _load_failure(target, error) from error
    return registry


__all__ = (
    "load_file",
    "command_classes",
    "import_target",
    "discover",
    "cache_commands",
    "cached_paths",
    "load_registry",
)
