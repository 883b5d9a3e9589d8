#!/usr/bin/env python3
"""
Hello world built on sergeant.

    $ python examples/hello_world.py hello
    Hello world!
    $ python examples/hello_world.py greet -n Ada --shout
    HELLO ADA!
    $ python examples/hello_world.py help greet
"""

import sys

from sergeant import Application, Command, command


@command(
    "hello",
    "say hello to the world",
    """
Hello greets the world with a friendly message.

Example usage:

  helloworld hello
""",
)
def cmd_hello(cmd, ctx, args):
    ctx.stdout.write("Hello world!\n")


class Greet(Command):
    usage_line = "greet [-n name] [--shout]"
    short = "greet someone by name"
    long = """
Greet prints a personal greeting.

The -n flag sets the name to greet; --shout prints it in capitals.
"""

    def add_args(self, parser):
        parser.add_argument("-n", "--name", default="world", help="who to greet")
        parser.add_argument("--shout", action="store_true", help="use capitals")

    def run(self, ctx, args):
        greeting = f"Hello {self.options.name}!"
        if self.options.shout:
            greeting = greeting.upper()
        ctx.lg.debug("greeting", extra={"name": self.options.name})
        ctx.stdout.write(greeting + "\n")


def run_echo(cmd, ctx, args):
    if not args:
        ctx.errorf("echo: nothing to echo")
        return None
    ctx.stdout.write(" ".join(args) + "\n")
    return None


cmd_echo = Command(
    "echo [args...]",
    "print arguments exactly as given",
    "Echo prints its arguments unchanged, including ones that look like flags.",
    run=run_echo,
    custom_flags=True,
)

help_greetings = Command(
    "greetings",
    "notes on greetings",
    """
Greetings are printed to standard output, one per line.
""",
)


def create_application() -> Application:
    return Application(
        "helloworld",
        "Prints 'Hello World!' to the console.",
        commands=[cmd_hello, Greet(), cmd_echo, help_greetings],
    )


def main(argv=None) -> int:
    return create_application().main(argv)


if __name__ == "__main__":
    sys.exit(main())
