"""
Artisan argument binder: turn invocation tokens into bound argument/option values.

Phases
- partition: tokens starting with '-' are option tokens, the rest are positional;
  both partitions keep the invocation order.
- positional binding, in declared order:
  • variadic fields look for a marker token equal to their own name and collect
    every token after it (the marker and its tail are consumed);
  • other fields consume the next token, or fall back to their default when optional.
- option binding, per declared option against the working set of option tokens:
  • long form '--name' / '--name=value', short form '-x' / '-xVALUE';
  • a matched token is removed, so each token satisfies at most one field;
  • grouped short flags ('-abc') are not decomposed.

Faults
- TooFewArgumentsError: a required positional has no token, a variadic marker is
  absent, or a valued option is given without its value.
- TooManyArgumentsError: positional tokens remain after every field is bound.
- UnknownOptionError: option tokens remain after every option is bound.

Binding is a pure function of (parsed signature, tokens): it only reads the parsed
fields, never mutates its inputs, and returns fresh read-only mappings.
"""
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .faults import TooFewArgumentsError, TooManyArgumentsError, UnknownOptionError, FaultCode, getdoc
from .signatures import parse_signature


class Bound(NamedTuple):
    """
    Values bound for one invocation (read-only mappings keyed by field name).
    """
    arguments: MappingProxyType
    options: MappingProxyType


def _too_few(message, /, **context):
    return TooFewArgumentsError(
        message,
        title="too few arguments",
        code=FaultCode.TOO_FEW_ARGUMENTS,
        hint="use -h for help",
        docs=getdoc(FaultCode.TOO_FEW_ARGUMENTS),
        **context
    )


def _bind_arguments(fields, tokens, /):
    values = {}
    remaining = deque(tokens)

    for name, field in fields.items():
        if field.variadic:
            try:
                marker = remaining.index(name)
            except ValueError:
                raise _too_few("missing values for %r (start them with %r)" % (name, name),
                               field=field, tokens=list(tokens)) from None
            collected = list(remaining)
            values[name] = collected[marker + 1:]
            remaining = deque(collected[:marker])
        elif remaining:
            values[name] = remaining.popleft()
        elif not field.optional:
            raise _too_few("missing value for argument %r" % name, field=field, tokens=list(tokens))
        else:
            values[name] = field.default

    if remaining:
        raise TooManyArgumentsError(
            "unexpected argument %r" % remaining[0],
            title="too many arguments",
            code=FaultCode.TOO_MANY_ARGUMENTS,
            hint="use -h for help",
            leftover=list(remaining),
            docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
        )

    return values


def _match(field, token, /):
    """
    Return the raw value carried by token for field, True for a bare boolean
    match, or None when the token does not belong to the field.
    """
    if token.startswith("--"):
        name, equals, value = token[2:].partition("=")
        if name != field.name:
            return None
        return value if field.valued else True
    if field.short is None or token[1:2] != field.short:
        return None
    if field.valued:
        return token[2:]
    # '-x' only; '-xyz' is a group and groups are not decomposed
    return True if len(token) == 2 else None


def _bind_options(fields, tokens, /):
    values = {}
    remaining = list(tokens)

    for name, field in fields.items():
        values[name] = field.default
        for index, token in enumerate(remaining):
            if (value := _match(field, token)) is None:
                continue
            if field.valued and not value:
                raise _too_few("option %r requires a value (e.g. --%s=<value>)" % (token, name),
                               field=field, token=token)
            values[name] = value
            del remaining[index]
            break

    if remaining:
        raise UnknownOptionError(
            "unknown option %r" % remaining[0],
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint="use -h for help",
            leftover=remaining,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        )

    return values


def bind(parsed, tokens, /):
    """
    Bind invocation tokens against a parsed signature.

    Parameters
    - parsed: ParsedSignature from parse_signature().
    - tokens: iterable of strings, usually the process arguments after the base word.

    Returns
    - Bound(arguments, options) with values str | bool | None | list[str].
    """
    tokens = list(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("bind() tokens must be strings")

    arguments = _bind_arguments(parsed.arguments, [token for token in tokens if not token.startswith("-")])
    options = _bind_options(parsed.options, [token for token in tokens if token.startswith("-")])

    return Bound(MappingProxyType(arguments), MappingProxyType(options))


def parse_arguments(signature, tokens, /):
    """
    Parse a signature text and bind tokens against it in one step.
    """
    return bind(parse_signature(signature), tokens)


__all__ = (
    "Bound",
    "bind",
    "parse_arguments",
)
