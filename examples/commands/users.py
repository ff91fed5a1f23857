from artisan import Command


class MakeUser(Command):
    signature = """make:user
        { name: The user name }
        { role=member: The user role }
        { --F|force: Overwrite an existing user }
        { --e|email=: Contact address }
    """
    description = "Create a new user"

    def handle(self):
        if self.option("force"):
            self.warn("overwriting %s" % self.argument("name"))
        email = self.option("email") or self.ask("Email address")
        self.info("created %s (%s) <%s>" % (self.argument("name"), self.argument("role"), email))


class ListUsers(Command):
    signature = "users:list { names*: Names to show }"
    description = "Show users in a table"

    def handle(self):
        self.verbose("listing %d user(s)" % len(self.argument("names")))
        self.table(["#", "name"], enumerate(self.argument("names"), 1))


class DeleteUser(Command):
    signature = "users:delete { name }"
    description = "Delete a user"

    def handle(self):
        if not self.confirm("Delete %s?" % self.argument("name")):
            self.comment("nothing deleted")
            return
        self.alert("%s deleted" % self.argument("name"))
