"""
cmdrunner command layer: register named commands and run a command line.

What this module provides
- CommandRunner: base class for tools that implement CLIs supporting multiple
  commands. The first command line argument may name a registered command;
  otherwise the runner performs its default command.
- invoke(runner, prompt): convenience runner that reports errors on stderr and
  turns the outcome into an exit code.

How a run proceeds (CommandRunner.run)
1. selection: a first argument not beginning with '-' names a command
   (case-insensitive). Unknown names complete with UnknownCommandError.
2. option declaration: -h/--help for everyone, then the command's
   add_options() or the runner's add_default_options().
3. tokenization: the configured parser (parse_options by default) builds the
   Arguments; positionals are forced to strings.
4. help: with --help set, the wrapped help is written to stdout and the run
   completes without error. Nothing else runs.
5. validation: parse_args() or parse_default_args(). A CommandError raised here
   completes the run; other exceptions propagate. Positionals left over
   complete the run with UnexpectedArgumentError.
6. execution: do_command() or do_default_command(), which calls complete().

Quick start
    from cmdrunner import CommandRunner, CommandSpec, NamedCommand, invoke

    class SayHello(NamedCommand):
        def do_command(self, args, complete):
            self.print("Well hello there!")
            complete()

    class Tool(CommandRunner):
        def __init__(self):
            super().__init__()
            self.add_commands([CommandSpec.of("HELLO", "Says hello back to you", SayHello)])

    if __name__ == "__main__":
        raise SystemExit(invoke(Tool()))
"""
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .faults import CommandError, UsageError, UnknownCommandError, UnexpectedArgumentError, FaultCode, report
from .options import OptionConfiguration
from .specs import CommandSpec, NamedCommand
from .tokens import parse_options
from .utils import Unset, rename, wrap

logger = logging.getLogger(__name__)

DEFAULT_WRAP_WIDTH = 80


def _completion(complete):
    """
    Guard a completion callback so it can fire at most once.

    A second call is a defect of the command implementation and raises
    RuntimeError instead of reaching the caller twice.
    """
    completed = False

    @rename("complete")
    def guarded(error=None):
        nonlocal completed
        if completed:
            raise RuntimeError("command completion called more than once")
        completed = True
        if error is None:
            logger.debug("run completed")
        else:
            logger.debug("run completed with %s: %s", type(error).__name__, error)
        complete(error)

    return guarded


class CommandRunner:
    """
    A command line supporting named commands and a default command.

    Parameters (keyword-only)
    - wrap: int, width in characters at which help output is wrapped (default 80).
    - parser: Callable[[list[str], OptionConfiguration], Arguments], the option
      tokenizer (default parse_options).
    - colorful: bool, whether invoke() styles the errors it reports.

    Extension points (override in a subclass)
    - add_default_options / parse_default_args / do_default_command for the
      default command.
    - get_help / get_help_intro / get_help_summary_entry / get_help_trailer for
      the aggregate help page.
    """

    def __init__(self, *, wrap=DEFAULT_WRAP_WIDTH, parser=parse_options, colorful=True):
        if not isinstance(wrap, int) or isinstance(wrap, bool):
            raise TypeError("%s 'wrap' must be an integer" % type(self).__name__)
        if wrap < 1:
            raise ValueError("%s 'wrap' must be positive" % type(self).__name__)
        if not callable(parser):
            raise TypeError("%s 'parser' must be callable" % type(self).__name__)
        self._wrap = wrap
        self._parser = parser
        self._colorful = bool(colorful)
        self._specs = []

    @property
    def wrap(self):
        """
        Width in characters at which help output is wrapped.
        """
        return self._wrap

    @property
    def colorful(self):
        return self._colorful

    @property
    def commands(self):
        """
        The registered command specs, in registration order.
        """
        return tuple(self._specs)

    def add_commands(self, group):
        """
        Add a group of related command specs. May be called multiple times;
        groups are spaced apart in the aggregate help.

        Raises
        - TypeError: an item is not a CommandSpec.
        - ValueError: a name (case-insensitively) is already registered.
        """
        group = list(group)
        for spec in group:
            if not isinstance(spec, CommandSpec):
                raise TypeError("add_commands() argument must be an iterable of command specs")
        seen = {spec.normalized_name for spec in self._specs}
        for spec in group:
            if spec.normalized_name in seen:
                raise ValueError("duplicate command name %r" % spec.normalized_name)
            seen.add(spec.normalized_name)
        for index, spec in enumerate(group):
            spec._first_of_group = index == 0
            self._specs.append(spec)
            logger.debug("registered command %r", spec.name)

    def find_command(self, name, /):
        """
        Return the spec registered under name (any letter case), or None.
        """
        normalized = str(name).lower()
        for spec in self._specs:
            if spec.normalized_name == normalized:
                return spec
        return None

    def run(self, argv, complete):
        """
        Run a command line.

        Parameters
        - argv: Sequence[str], the arguments without the program itself
          (sys.argv[1:] for a script).
        - complete: Callable[[Exception | None], None], called exactly once
          with None on success or with the error. Errors that are instances of
          CommandError are for the calling application to report.

        Exceptions other than CommandError raised while declaring or
        validating arguments are defects and propagate from run().
        """
        argv = list(argv)
        complete = _completion(complete)
        options = OptionConfiguration(boolean="h", alias={"h": "help"})
        command = None

        if argv and not argv[0].startswith("-"):
            spec = self.find_command(argv[0])
            if spec is None:
                logger.debug("no command named %r", argv[0])
                return complete(UnknownCommandError(argv[0].lower()))
            command = spec.create_command()
            command._bind(self, spec)
            logger.debug("selected command %r", spec.name)
            command.add_options(options)
            args = self._parser(argv[1:], options)
        else:
            logger.debug("running the default command")
            self.add_default_options(options)
            args = self._parser(argv, options)

        if args.get("help"):
            logger.debug("help requested")
            text = command.get_help(self._wrap) if command else self.get_help(self._wrap)
            Console(highlight=False, soft_wrap=True).print(wrap(text, self._wrap), end="", markup=False, emoji=False)
            return complete()

        # the tokenizer must not decide the types of positionals
        args.positionals[:] = [str(positional) for positional in args.positionals]

        try:
            if command:
                command.parse_args(args)
            else:
                self.parse_default_args(args)
        except CommandError as error:
            logger.debug("arguments rejected: %s", error)
            return complete(error)

        if args.positionals:
            return complete(UnexpectedArgumentError(args.positionals[0]))

        if command:
            command.do_command(args, complete)
        else:
            self.do_default_command(args, complete)

    def add_default_options(self, options):
        """
        Declare options for the default command (beyond -h/--help).

        Does nothing by default. See NamedCommand.add_options().
        """

    def parse_default_args(self, args):
        """
        Validate and consume the default command's arguments.

        Does nothing by default. Raise UsageError for invalid input. See
        NamedCommand.parse_args().
        """

    def do_default_command(self, args, complete):
        """
        Perform the default command, the one run when the first argument is
        not a command name.

        By default, reports a missing command when commands are registered,
        and otherwise that no default command is implemented.
        """
        if self._specs:
            complete(UsageError("missing command argument", code=FaultCode.MISSING_COMMAND))
        else:
            complete(CommandError("default command not implemented"))

    def get_help(self, width):
        """
        Return the help page summarizing every command.

        Composed of get_help_intro(), one get_help_summary_entry() per command
        (groups separated by a blank line) and get_help_trailer().
        """
        if not self._specs:
            return "Help is not available.\n"
        help = self.get_help_intro(width)
        for spec in self._specs:
            if spec.first_of_group:
                help += "\n"
            help += self.get_help_summary_entry(spec, width)
        return help + self.get_help_trailer(width)

    def get_help_intro(self, width):
        """
        Return the introduction preceding the list of commands.
        """
        return "This tool supports the following commands:\n"

    def get_help_summary_entry(self, spec, width):
        """
        Return the summary of one command as it appears on the help page:
        the upper-cased name with the rest of its syntax, then the summary
        indented by two spaces.
        """
        syntax = spec.syntax[spec.syntax.index(spec.name) + len(spec.name):]
        summary = wrap("  " + spec.summary, width)
        return "%s%s\n%s\n" % (spec.name.upper(), syntax, summary)

    def get_help_trailer(self, width):
        """
        Return the text following the command summaries (a blank line).
        """
        return "\n"

    def __repr__(self):
        return "%s(commands=%r)" % (type(self).__name__, [spec.name for spec in self._specs])


def invoke(runner, prompt=Unset, /):
    """
    Run a command line and report the outcome for a script.

    Parameters
    - runner: CommandRunner
    - prompt:
      • Unset: read sys.argv[1:].
      • str: shell-like string, split with shlex.split.
      • Iterable[str]: pre-tokenized arguments.

    Behavior
    - UsageError: reported on stderr with a hint to use -h; exit code 2.
    - CommandError: reported on stderr; exit code 1.
    - any other error handed to the completion callback is re-raised.

    Returns
    - 0, 1 or 2 as above, or None when the command has not completed by the
      time run() returns.
    """
    if not isinstance(runner, CommandRunner):
        raise TypeError("invoke() first argument must be a command runner")
    if prompt is Unset:
        argv = sys.argv[1:]
    elif isinstance(prompt, str):
        argv = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        argv = list(prompt)
        if not all(isinstance(item, str) for item in argv):
            raise TypeError("invoke() argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    outcome = []

    def complete(error=None):
        if error is None:
            outcome.append(0)
        elif isinstance(error, UsageError):
            report(error, colorful=runner.colorful)
            outcome.append(2)
        elif isinstance(error, CommandError):
            report(error, colorful=runner.colorful)
            outcome.append(1)
        else:
            raise error

    runner.run(argv, complete)
    return outcome[0] if outcome else None


__all__ = (
    "CommandRunner",
    "invoke",
    "DEFAULT_WRAP_WIDTH",
)
