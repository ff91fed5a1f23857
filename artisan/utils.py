"""
Artisan helpers shared by the grammar, configuration and application layers.

- Unset: "argument not given" marker for APIs where None is a real value (an
  optional argument binds to None, a chooser may return None).
- coalesce(value, default): swap Unset for a default, leave every other value alone.
- mirror(name): read-only property over self._<name>; list, dict and set values
  are handed out as copies so parsed fields cannot be edited through them.
"""
import functools
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker; there is exactly one instance.

    Unset is falsy, prints as "Unset" and takes part in isinstance unions, so
    parameters are checked as `isinstance(value, Config | Unset)`.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


def coalesce(object, default=None, /):
    """
    >>> coalesce(Unset, "artisan.json")
    'artisan.json'
    >>> coalesce(None, "artisan.json") is None
    True
    """
    return default if object is Unset else object


def _detach(value):
    if isinstance(value, Mapping):
        return {key: _detach(item) for key, item in value.items()}
    if isinstance(value, Set):
        return set(value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [_detach(item) for item in value]
    return value


def mirror(name, /):
    """
    Build a read-only property returning a detached copy of self._<name>.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    attribute = "_" + name

    def getter(self):
        return _detach(getattr(self, attribute))

    getter.__name__ = getter.__qualname__ = name
    return property(getter, doc=f"Read-only view of {name!r}.")


Unset = UnsetType()


__all__ = (
    "coalesce",
    "mirror",
    "UnsetType",
    "Unset",
)
