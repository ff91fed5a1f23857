"""
Registry and resolver tests (registration, exact match, suggestions, faults).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from artisan import Command, Registry, Entry, Suggestions, resolve, suggest
from artisan.faults import InvalidCommandError, MalformedSignatureError, UnresolvedCommandError, FaultCode


def define(signature, description=""):
    return type("Defined", (Command,), {
        "signature": signature,
        "description": description,
        "handle": lambda self: None,
    })


class TestRegistration(TestCase):

    def setUp(self):
        self.registry = Registry()

    def testRegisterBuildsEntry(self):
        cls = define("make:user {name} {--F|force}", "Create a user")
        self.assertIs(self.registry.register(cls), cls)
        entry = self.registry["make:user"]
        self.assertIsInstance(entry, Entry)
        self.assertEqual(entry.pattern, "{name} {--F|force}")
        self.assertEqual(entry.description, "Create a user")
        self.assertIsInstance(entry.create(), cls)

    def testRegisterAsDecorator(self):
        @self.registry.register
        class Inspire(Command):
            signature = "inspire"

            def handle(self):
                return "quote"

        self.assertIn("inspire", self.registry)
        self.assertEqual(self.registry["inspire"].pattern, "")

    def testReRegisteringIsIdempotent(self):
        cls = define("inspire")
        self.registry.register(cls)
        self.registry.register(cls)
        self.assertEqual(len(self.registry), 1)

    def testDuplicateBase(self):
        self.registry.register(define("inspire"))
        with self.assertRaises(ValueError):
            self.registry.register(define("inspire {quote?}"))

    def testEmptySignature(self):
        with self.assertRaises(InvalidCommandError) as context:
            self.registry.register(define("   "))
        self.assertIs(context.exception.options["code"], FaultCode.INVALID_COMMAND)

    def testMissingSignature(self):
        class Unsigned(Command):
            def handle(self):
                pass

        with self.assertRaises(InvalidCommandError):
            self.registry.register(Unsigned)

    def testNotACommand(self):
        with self.assertRaises(InvalidCommandError):
            self.registry.register(object)

    def testMalformedPatternFailsAtRegistration(self):
        with self.assertRaises(MalformedSignatureError):
            self.registry.register(define("broken {name"))

    def testIterationKeepsRegistrationOrder(self):
        for base in ("b", "a", "c"):
            self.registry.register(define(base))
        self.assertEqual([entry.base for entry in self.registry], ["b", "a", "c"])


class TestResolver(TestCase):

    def setUp(self):
        self.registry = Registry(define(base) for base in ("make:user", "make:post", "migrate", "migrate:rollback"))

    def testExactMatch(self):
        entry = resolve("migrate", self.registry)
        self.assertIsInstance(entry, Entry)
        self.assertEqual(entry.base, "migrate")

    def testPrefixSuggestions(self):
        self.assertEqual(resolve("make", self.registry), Suggestions("make", ("make:post", "make:user")))

    def testNamespaceSuggestions(self):
        self.assertEqual(resolve("migrate:foo", self.registry), Suggestions("migrate:foo", ("migrate:rollback",)))

    def testSuggestionsAreCaseSensitive(self):
        with self.assertRaises(UnresolvedCommandError):
            resolve("MAKE", self.registry)

    def testUnresolved(self):
        with self.assertRaises(UnresolvedCommandError) as context:
            resolve("xyz", self.registry)
        self.assertIs(context.exception.options["code"], FaultCode.UNRESOLVED_COMMAND)
        self.assertEqual(context.exception.options["base"], "xyz")

    def testSuggestIsSorted(self):
        self.assertEqual(suggest("m", ["migrate", "make:user", "make:post"]), ("make:post", "make:user", "migrate"))


if __name__ == "__main__":
    unittest.main()
