import asyncio

from artisan import Command


class Deploy(Command):
    signature = """deploy
        { environment?: Target environment }
        { --d|dry: Only print the plan }
    """
    description = "Deploy the application"

    async def handle(self):
        environment = self.argument("environment") or self.choice("Environment", ["staging", "production"])
        for step in ("build", "upload", "restart"):
            if self.option("dry"):
                self.comment("would %s on %s" % (step, environment))
                continue
            await asyncio.sleep(0.1)
            self.info("%s on %s" % (step, environment))
