"""
A small runner showing the framework end to end.

    $ python main.py hello
    Well hello there!
    $ python main.py greet Ada --times=2 --loud
    HELLO, ADA!
    HELLO, ADA!
    $ python main.py forget --yes
    $ python main.py --help
"""
from .commands import CommandRunner, invoke
from .specs import CommandSpec, NamedCommand
from .utils import confirm


class SayHelloCommand(NamedCommand):

    def do_command(self, args, complete):
        self.print("Well hello there!")
        complete()


class GreetCommand(NamedCommand):

    def add_options(self, options):
        super().add_options(options)
        options.add(boolean="loud", alias={"l": "loud", "t": "times"}, default={"times": 1})

    def parse_args(self, args):
        self.who = args.next_positional()
        if self.who is None:
            raise self.usage_error("greet needs somebody to greet")
        self.times = args["times"]
        if not isinstance(self.times, int) or isinstance(self.times, bool) or self.times < 1:
            raise self.usage_error("--times must be a positive integer, got %r", args["times"])

    def do_command(self, args, complete):
        greeting = "Hello, %s!" % self.who
        for _ in range(self.times):
            self.print(greeting.upper() if args["loud"] else greeting)
        complete()

    def get_help(self, width):
        return super().get_help(width) + (
            "\nOptions:\n"
            "  -t, --times N   greet N times (default 1)\n"
            "  -l, --loud      shout the greeting\n"
        )


class ForgetCommand(NamedCommand):

    def add_options(self, options):
        super().add_options(options)
        options.add(boolean="yes", alias={"y": "yes"})

    def do_command(self, args, complete):
        if not args["yes"] and not confirm("Forget everybody?"):
            return complete(self.error("nothing forgotten"))
        self.print("Forgot everybody.")
        complete()


class Demo(CommandRunner):

    def __init__(self, **options):
        super().__init__(**options)
        self.add_commands([
            CommandSpec.of("HELLO", "Says hello back to you", SayHelloCommand),
            CommandSpec.of("greet NAME [--times=N] [--loud]", "Greets NAME, possibly more than once", GreetCommand),
        ])
        self.add_commands([
            CommandSpec.of("forget [--yes]", "Asks before forgetting everybody", ForgetCommand),
        ])

    def get_help_intro(self, width):
        return "A demonstration of cmdrunner. Commands:\n"


def main(argv=None):
    """
    Entry point: run the demo on argv (sys.argv[1:] when None), return an exit code.
    """
    if argv is None:
        return invoke(Demo())
    return invoke(Demo(), argv)


__all__ = (
    "Demo",
    "main",
)
