r"""
Artisan signature grammar: parse command signatures into field specifications.

Overview
- A signature is a base word followed by bracketed clauses:
      make:user {name} {role=member} {--F|force} {--o|output=: where to write}
- Each clause declares one field: a positional argument or a flag option.

Grammar
    signature := base (' ' clause)*
    clause    := '{' ws* field ws* '}'
    field     := flagMarker? name ('|' name)? modifier? (':' description)?
    flagMarker:= '--' | '-'
    modifier  := '=' value? | '?' | '*'

Scanning
- A single left-to-right pass without backtracking. The clause scanner is a pure
  function of (text, index) returning (field, next_index); nothing outside the
  call keeps a cursor.
- A default runs up to the closing brace or whitespace. A colon inside it
  ("localhost:8080") belongs to the value; a colon followed by a blank or "}"
  starts the description ({port=80: the port}).
- Identifiers are restricted to [a-zA-Z0-9]; other characters that no rule claims
  are skipped silently.
- Text outside clauses (the base word, line breaks, indentation) is ignored, so
  full signatures and bare patterns parse alike.

Public API
- Kind, Field, ParsedSignature, Descriptions
- parse_signature(text), parse_descriptions(text), split_signature(text)
"""
import enum
import functools
import operator
import string
from types import MappingProxyType
from typing import NamedTuple, final

from .faults import MalformedSignatureError, FaultCode, getdoc
from .utils import *

_IDENTIFIER = frozenset(string.ascii_letters + string.digits)


class Kind(enum.Enum):
    """
    Field kinds: positional arguments and flag options (one or two leading dashes).
    """
    POSITIONAL = "positional"
    FLAG = "flag"


@final
class Field:
    """
    Immutable description of a single signature clause.

    Properties
    - name: identifier of the field (unique per kind within a signature).
    - short: single-character alias, or None (flags only).
    - kind: Kind.POSITIONAL or Kind.FLAG.
    - default: value bound when the field is not supplied.
    - has_default: whether an '=' modifier was declared.
    - optional: '?' or '=' on a positional; always true for flags.
    - valued: a flag declared with '=' that takes an explicit value.
    - variadic: a positional declared with '*' collecting a list of strings.
    - description: help text after ':' (trimmed), or None when absent.
    """

    __introspectable__ = (
        "name",
        "short",
        "kind",
        "default",
        "has_default",
        "optional",
        "valued",
        "variadic",
        "description",
    )

    def __init__(
            self,
            name,
            /,
            short=None,
            kind=Kind.POSITIONAL,
            default=None,
            *,
            has_default=False,
            optional=False,
            valued=False,
            variadic=False,
            description=None
    ):
        self._name = name
        self._short = short
        self._kind = kind
        self._default = default
        self._has_default = has_default
        self._optional = optional
        self._valued = valued
        self._variadic = variadic
        self._description = description

    name = mirror("name")
    short = mirror("short")
    kind = mirror("kind")
    default = mirror("default")
    has_default = mirror("has_default")
    optional = mirror("optional")
    valued = mirror("valued")
    variadic = mirror("variadic")
    description = mirror("description")

    @property
    def flag(self):
        return self._kind is Kind.FLAG

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"field({", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))})"

    def __eq__(self, other):
        if not isinstance(other, Field):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((self._name, self._kind))


class ParsedSignature(NamedTuple):
    """
    Fields of a signature, split by kind and kept in declared order.
    """
    arguments: MappingProxyType
    options: MappingProxyType


class Descriptions(NamedTuple):
    """
    Help text of a signature's fields, keyed by field name.
    """
    arguments: MappingProxyType
    options: MappingProxyType


def _malformed(text, index, message, hint, /):
    return MalformedSignatureError(
        "%s at offset %d of signature %r" % (message, index, text),
        title="malformed signature",
        code=FaultCode.MALFORMED_SIGNATURE,
        hint=hint,
        signature=text,
        index=index,
        docs=getdoc(FaultCode.MALFORMED_SIGNATURE),
    )


def _scan(text, index, /):
    """
    Scan one clause starting right after its opening brace.

    Returns
    - (Field, next_index) where next_index points past the closing brace.

    Raises
    - MalformedSignatureError when the text ends before '}', the clause has no
      name, or an alias/variadic marker is used where it does not apply.
    """
    start = index - 1
    length = len(text)

    while index < length and text[index].isspace():
        index += 1

    flag = False
    shortonly = False
    if text.startswith("--", index):
        flag = True
        index += 2
    elif text.startswith("-", index):
        flag = shortonly = True
        index += 1

    name = ""
    short = None
    default = False if flag else None
    has_default = False
    optional = flag
    valued = False
    variadic = False
    description = None

    while index < length and text[index] != "}":
        char = text[index]
        if char in _IDENTIFIER:
            name += char
        elif char == "|":
            if not flag:
                raise _malformed(text, start, "alias declared on positional %r" % name,
                                 "aliases are only allowed on options, e.g. {--f|force}")
            short, name = name, ""
        elif char == "=":
            value = ""
            index += 1
            while index < length and text[index] != "}" and not text[index].isspace():
                # a colon before a blank or the closing brace opens the description
                if text[index] == ":" and (index + 1 == length or text[index + 1] == "}" or text[index + 1].isspace()):
                    break
                value += text[index]
                index += 1
            default = value or None
            has_default = True
            if flag:
                valued = True
            else:
                optional = True
            # the terminator is handled by the main loop
            continue
        elif char == "?":
            optional = True
            default = None
        elif char == "*":
            if flag:
                raise _malformed(text, start, "variadic marker on option %r" % name,
                                 "only positional arguments can be variadic, e.g. {users*}")
            variadic = True
            default = []
        elif char == ":":
            close = text.find("}", index)
            if close == -1:
                raise _malformed(text, start, "unterminated description",
                                 "close every clause with '}', e.g. {name: the user name}")
            description = text[index + 1:close].strip()
            index = close
            continue
        index += 1

    if index >= length:
        raise _malformed(text, start, "unterminated clause",
                         "close every clause with '}', e.g. {name}")

    if not name:
        raise _malformed(text, start, "clause without a name",
                         "name every clause with letters or digits, e.g. {name} or {--force}")

    if shortonly and short is None:
        short = name

    if short is not None and len(short) != 1:
        raise _malformed(text, start, "alias %r of option %r is not a single character" % (short, name),
                         "use a one-character alias, e.g. {--f|force}")

    field = Field(
        name,
        short,
        Kind.FLAG if flag else Kind.POSITIONAL,
        default,
        has_default=has_default,
        optional=optional,
        valued=valued,
        variadic=variadic,
        description=description,
    )
    return field, index + 1


def _fields(text, /):
    """
    Yield (field, offset) for every clause of the text, in declared order.
    """
    if not isinstance(text, str):
        raise TypeError("signature must be a string")

    index = text.find("{")
    while index != -1:
        field, next = _scan(text, index + 1)
        yield field, index
        index = text.find("{", next)


@functools.cache
def parse_signature(text, /):
    """
    Parse a signature (or a bare pattern) into its arguments and options.

    Positionals land in `arguments`, flags in `options`, both keyed by name in
    declared order. A name declared twice within the same mapping, or a short
    alias shared by two options, is rejected.
    The result is cached per text; it is read-only and safe to share.
    """
    arguments = {}
    options = {}
    shorts = {}

    for field, offset in _fields(text):
        target = options if field.flag else arguments
        if field.name in target:
            raise _malformed(text, offset, "%s %r declared twice" % ("option" if field.flag else "argument", field.name),
                             "give every argument and every option a distinct name")
        if field.short is not None:
            if (owner := shorts.setdefault(field.short, field.name)) != field.name:
                raise _malformed(text, offset, "alias %r of option %r is already used by option %r" % (field.short, field.name, owner),
                                 "give every option a distinct alias, e.g. {--V|version}")
        target[field.name] = field

    return ParsedSignature(MappingProxyType(arguments), MappingProxyType(options))


def parse_descriptions(text, /):
    """
    Extract only the human-readable help text of a signature.

    Values are the trimmed descriptions; fields without ':' map to None, and an
    empty or all-whitespace description maps to "".
    """
    parsed = parse_signature(text)
    return Descriptions(
        MappingProxyType({name: field.description for name, field in parsed.arguments.items()}),
        MappingProxyType({name: field.description for name, field in parsed.options.items()}),
    )


def split_signature(text, /):
    """
    Split a signature into its base word and its pattern.

    >>> split_signature("make:user {name} {--force}")
    ('make:user', '{name} {--force}')
    >>> split_signature("inspire")
    ('inspire', '')
    """
    if not isinstance(text, str):
        raise TypeError("signature must be a string")
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


__all__ = (
    "Kind",
    "Field",
    "ParsedSignature",
    "Descriptions",
    "parse_signature",
    "parse_descriptions",
    "split_signature",
)
