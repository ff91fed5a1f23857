import time

from rich.pretty import pprint

from artisan import *


app = Artisan(configure(name="Artisan", load=["examples/commands"], commands=["examples/commands/users.py"]))


@app.command
class Inspect(Command):
    signature = """inspect
        { a: First arg }
        { b: Second arg }
        { c?: Third arg }
        { --dog: First opt }
    """
    description = "Print the bound arguments and options"

    def handle(self):
        pprint(dict(self.arguments()))
        pprint(dict(self.options()))


@app.command
class Sleep(Command):
    signature = "sleep { --n|count=10: how many tasks to run }"
    description = "Run a batch of slow tasks behind a progress bar"

    def handle(self):
        results = self.with_progress(range(int(self.option("count"))), lambda item: time.sleep(0.2) or item)
        self.info("finished %d tasks" % len(results))


if __name__ == '__main__':
    app.parse()
