"""
Binder behavioral tests (positionals, defaults, flags, aliases, variadics, faults).

Scope
- Validate positional binding in declared order with optional/default fallbacks.
- Validate boolean, aliased and valued options in long and short form.
- Validate variadic collection after its marker token.
- Validate the classified faults for missing, leftover and unknown tokens.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (parse_arguments, bind, parse_signature).
"""
import unittest
from unittest import TestCase

from artisan import parse_arguments, bind, parse_signature
from artisan.faults import (
    TooFewArgumentsError,
    TooManyArgumentsError,
    UnknownOptionError,
    FaultCode,
)


def plain(bound):
    return dict(bound.arguments), dict(bound.options)


class TestPositionalBinding(TestCase):
    """Positional tokens against argument fields."""

    def testBindsInOrder(self):
        self.assertEqual(plain(parse_arguments("{a} {b}", ["foo", "bar"])), ({"a": "foo", "b": "bar"}, {}))

    def testOptionalArgumentMissing(self):
        self.assertEqual(plain(parse_arguments("{a} {b?}", ["foo"])), ({"a": "foo", "b": None}, {}))

    def testDefaultArgumentMissing(self):
        self.assertEqual(plain(parse_arguments("{a} {b=bar}", ["foo"])), ({"a": "foo", "b": "bar"}, {}))

    def testMixedRequiredAndOptional(self):
        arguments, _ = plain(parse_arguments("{a} {b?} {c} {d?}", ["foo", "bar", "baz"]))
        self.assertEqual(arguments, {"a": "foo", "b": "bar", "c": "baz", "d": None})

    def testTooManyArguments(self):
        with self.assertRaises(TooManyArgumentsError) as context:
            parse_arguments("{a} {b}", ["foo", "bar", "baz"])
        self.assertIs(context.exception.options["code"], FaultCode.TOO_MANY_ARGUMENTS)
        self.assertEqual(context.exception.options["leftover"], ["baz"])

    def testTooFewArguments(self):
        with self.assertRaises(TooFewArgumentsError) as context:
            parse_arguments("{a} {b}", ["foo"])
        self.assertIs(context.exception.options["code"], FaultCode.TOO_FEW_ARGUMENTS)
        self.assertEqual(context.exception.options["field"].name, "b")

    def testDescribedSignature(self):
        arguments, _ = plain(parse_arguments("""test
            { a: First arg }
            { b }
            { c: Third arg with ( ) special characters }
        """, ["foo", "bar", "baz"]))
        self.assertEqual(arguments, {"a": "foo", "b": "bar", "c": "baz"})

    def testDescribedDefault(self):
        arguments, _ = plain(parse_arguments("test { a: First arg } { b=bar: with default }", ["foo"]))
        self.assertEqual(arguments, {"a": "foo", "b": "bar"})


class TestOptionBinding(TestCase):
    """Option tokens against flag fields."""

    def testBooleanFlags(self):
        self.assertEqual(plain(parse_arguments("{--foo} {--bar}", ["--foo", "--bar"])), ({}, {"foo": True, "bar": True}))

    def testMissingBooleanFlagIsFalse(self):
        self.assertEqual(plain(parse_arguments("{--foo} {--bar}", ["--bar"])), ({}, {"foo": False, "bar": True}))

    def testAlias(self):
        self.assertEqual(plain(parse_arguments("{--F|foo}", ["-F"])), ({}, {"foo": True}))

    def testAliasedFlagByLongName(self):
        self.assertEqual(plain(parse_arguments("{--F|foo}", ["--foo"])), ({}, {"foo": True}))

    def testValuedOption(self):
        self.assertEqual(plain(parse_arguments("{--foo=}", ["--foo=bar"])), ({}, {"foo": "bar"}))

    def testValuedOptionMissingIsNone(self):
        self.assertEqual(plain(parse_arguments("{--foo=}", [])), ({}, {"foo": None}))

    def testValuedOptionDefault(self):
        self.assertEqual(plain(parse_arguments("{--foo=bar}", [])), ({}, {"foo": "bar"}))

    def testValuedOptionWithoutValue(self):
        with self.assertRaises(TooFewArgumentsError):
            parse_arguments("{--foo=}", ["--foo="])
        with self.assertRaises(TooFewArgumentsError):
            parse_arguments("{--foo=}", ["--foo"])

    def testValuedOptionByAlias(self):
        self.assertEqual(plain(parse_arguments("{--F|foo=}", ["-Fbar"])), ({}, {"foo": "bar"}))

    def testValuedAliasedOptionByLongName(self):
        self.assertEqual(plain(parse_arguments("{--F|foo=}", ["--foo=bar"])), ({}, {"foo": "bar"}))

    def testValueKeepsEqualsSigns(self):
        _, options = plain(parse_arguments("{--query=}", ["--query=a=b"]))
        self.assertEqual(options, {"query": "a=b"})

    def testOptionalFlagMissingIsNone(self):
        _, options = plain(parse_arguments("test { --foo: first } { --bar?: second }", ["--foo"]))
        self.assertEqual(options, {"foo": True, "bar": None})

    def testSingleDashFlags(self):
        _, options = plain(parse_arguments("""test
            { --foo: First option }
            { -b }
            { -c|baz: Third option }
        """, ["--foo", "-b", "--baz"]))
        self.assertEqual(options, {"foo": True, "b": True, "baz": True})

    def testUnknownOption(self):
        with self.assertRaises(UnknownOptionError) as context:
            parse_arguments("{--foo}", ["--foo", "--bar"])
        self.assertIs(context.exception.options["code"], FaultCode.UNKNOWN_OPTION)
        self.assertEqual(context.exception.options["leftover"], ["--bar"])

    def testRepeatedOptionIsUnknown(self):
        with self.assertRaises(UnknownOptionError):
            parse_arguments("{--foo}", ["--foo", "--foo"])

    def testGroupedShortFlagsAreNotSplit(self):
        with self.assertRaises(UnknownOptionError):
            parse_arguments("{--a|all} {--b|bare}", ["-ab"])

    def testArgumentsAndOptionsTogether(self):
        self.assertEqual(
            plain(parse_arguments("""test
                { a: First arg }
                { b: Second arg }
                { --foo: First option }
                { --b|bar: Second option }
            """, ["foo", "bar", "--foo", "-b"])),
            ({"a": "foo", "b": "bar"}, {"foo": True, "bar": True}),
        )

    def testOptionsMayPrecedeArguments(self):
        self.assertEqual(
            plain(parse_arguments("{a} {--force}", ["--force", "foo"])),
            ({"a": "foo"}, {"force": True}),
        )


class TestVariadicBinding(TestCase):
    """Variadic positionals collect the tokens following their marker."""

    def testCollectsAfterMarker(self):
        arguments, _ = plain(parse_arguments("{users*}", ["users", "user1", "user2", "user3"]))
        self.assertEqual(arguments, {"users": ["user1", "user2", "user3"]})

    def testMarkerWithoutValues(self):
        arguments, _ = plain(parse_arguments("{users*}", ["users"]))
        self.assertEqual(arguments, {"users": []})

    def testMissingMarker(self):
        with self.assertRaises(TooFewArgumentsError):
            parse_arguments("{users*}", ["user1", "user2"])

    def testTokensBeforeMarkerBindLaterFields(self):
        arguments, _ = plain(parse_arguments("{users*} {group}", ["admins", "users", "ana", "bob"]))
        self.assertEqual(arguments, {"users": ["ana", "bob"], "group": "admins"})

    def testVariadicWithOptions(self):
        self.assertEqual(
            plain(parse_arguments("{users*} {--F|force}", ["users", "ana", "-F", "bob"])),
            ({"users": ["ana", "bob"]}, {"force": True}),
        )


class TestBindPurity(TestCase):

    def testInputsAreNotMutated(self):
        parsed = parse_signature("{a} {b?} {--foo=}")
        tokens = ["x", "--foo=1"]
        first = bind(parsed, tokens)
        second = bind(parsed, tokens)
        self.assertEqual(tokens, ["x", "--foo=1"])
        self.assertEqual(plain(first), plain(second))

    def testResultIsReadOnly(self):
        bound = parse_arguments("{a}", ["x"])
        with self.assertRaises(TypeError):
            bound.arguments["a"] = "y"  # type: ignore[index]

    def testNonStringTokens(self):
        with self.assertRaises(TypeError):
            parse_arguments("{a}", [1])


if __name__ == "__main__":
    unittest.main()
