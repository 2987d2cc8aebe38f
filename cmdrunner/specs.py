"""
Command specifications and named-command handlers.

What this module provides
- CommandSpec: static descriptor of one named command (name, syntax, summary)
  with a factory method producing a fresh handler per invocation, so a single
  CommandRunner configuration can run any number of times.
- NamedCommand: the handler base class. CommandRunner creates one per run,
  binds it (runner, spec, name) and drives its hooks:

      add_options(options)      declare options beyond -h/--help
      parse_args(args)          validate options, consume positionals
      do_command(args, complete)  perform the command, then complete(error=None)
      get_help(width)           help shown for "<command> --help"

Quick start
    class HelloCommand(NamedCommand):
        def add_options(self, options):
            super().add_options(options)
            options.add(boolean="loud", alias={"l": "loud"})

        def parse_args(self, args):
            self.who = args.next_positional() or "world"

        def do_command(self, args, complete):
            self.print(("HELLO %s!" if args["loud"] else "hello %s") % self.who)
            complete()

    runner.add_commands([CommandSpec.of("hello [WHO]", "Greets somebody", HelloCommand)])
"""
import re
from abc import ABC, abstractmethod

from rich.console import Console

from .faults import CommandError, UsageError


class CommandSpec(ABC):
    """
    Specification of a named command.

    Parameters
    - syntax: str
      Illustration of the command's argument syntax. Its first term is the
      command name, which must not begin with a dash. The name may use any
      letter case; users may type it in any letter case.
    - summary: str
      A single line summarizing the command for the aggregate help.

    Raises
    - TypeError: syntax or summary is not a string.
    - ValueError: syntax has no name, or the name begins with a dash.
    """

    def __init__(self, syntax, summary):
        if not isinstance(syntax, str):
            raise TypeError("%s 'syntax' must be a string" % type(self).__name__)
        if not isinstance(summary, str):
            raise TypeError("%s 'summary' must be a string" % type(self).__name__)
        match = re.search(r"[^ ]+", syntax)
        if not match:
            raise ValueError("%r is missing a command name" % syntax)
        if match[0].startswith("-"):
            raise ValueError("command name %r cannot start with a dash" % match[0])
        self._syntax = syntax
        self._summary = summary
        self._name = match[0]
        self._normalized_name = self._name.lower()
        self._first_of_group = False

    @property
    def name(self):
        """
        The name of the command, as given by the syntax.
        """
        return self._name

    @property
    def normalized_name(self):
        """
        The lower-cased name, used for case-insensitive lookup.
        """
        return self._normalized_name

    @property
    def syntax(self):
        return self._syntax

    @property
    def summary(self):
        return self._summary

    @property
    def first_of_group(self):
        """
        Whether the registry placed this spec first in its group (help spacing).
        """
        return self._first_of_group

    @abstractmethod
    def create_command(self):
        """
        Create the NamedCommand instance that runs the command.
        """

    @classmethod
    def of(cls, syntax, summary, factory, /):
        """
        Build a spec whose create_command() calls factory().

        factory is any zero-argument callable returning a NamedCommand,
        typically the NamedCommand subclass itself.
        """
        if not callable(factory):
            raise TypeError("CommandSpec.of() 'factory' must be callable")
        return _FactorySpec(syntax, summary, factory)

    def __repr__(self):
        return "%s(%r, %r)" % (type(self).__name__, self._syntax, self._summary)


class _FactorySpec(CommandSpec):

    def __init__(self, syntax, summary, factory):
        super().__init__(syntax, summary)
        self._factory = factory

    def create_command(self):
        command = self._factory()
        if not isinstance(command, NamedCommand):
            raise TypeError("command factory for %r must return a named command" % self.name)
        return command

    def __repr__(self):
        return "CommandSpec.of(%r, %r, %s)" % (
            self._syntax, self._summary, getattr(self._factory, "__qualname__", repr(self._factory))
        )


class NamedCommand(ABC):
    """
    A named command: the handler CommandRunner delegates to when the first
    command line argument names it.

    After creating the instance and before calling any hook, the runner binds:

    Attribute | Description
    --- | ---
    runner | the calling CommandRunner
    spec | the CommandSpec that created this command
    name | the command name, as in the first term of the syntax

    One instance serves exactly one invocation; any state a hook stores on
    self is discarded with the instance.
    """
    runner = None
    spec = None
    name = None

    def add_options(self, options):
        """
        Declare command line options beyond -h/--help.

        options is the run's OptionConfiguration; call options.add(...) any
        number of times. Subclasses extending another command call
        super().add_options(options) so every class in the chain contributes.
        Only add to options; do nothing else here.
        """

    def parse_args(self, args):
        """
        Validate and consume the parsed arguments.

        args maps option names to values; args.positionals holds the
        non-option arguments. Remove every positional this command recognizes
        (args.next_positional() returns None when they run out). Any left over
        make the runner report UnexpectedArgumentError and skip do_command().

        Raise UsageError (see usage_error()) for invalid input. Anything else
        raised here is treated as a defect and propagates to the caller.
        """

    @abstractmethod
    def do_command(self, args, complete):
        """
        Perform the command.

        Must call complete() exactly once when done, possibly later (after a
        prompt, for instance). Report failure by passing a CommandError to
        complete(error); do not raise.
        """

    def get_help(self, width):
        """
        Help for "<command> -h". Defaults to the command's summary entry.

        The runner wraps the result at width.
        """
        return self.runner.get_help_summary_entry(self.spec, width)

    def error(self, message, /, *args):
        """
        Return a CommandError, %-formatting message with args when given.
        """
        return CommandError(message % args if args else message)

    def usage_error(self, message, /, *args):
        """
        Return a UsageError, %-formatting message with args when given.
        """
        return UsageError(message % args if args else message)

    def print(self, *objects, sep=" "):
        """
        Write a line to standard output (plain text, no markup).
        """
        Console(highlight=False, soft_wrap=True).print(*objects, sep=sep, markup=False, emoji=False)

    def _bind(self, runner, spec):
        # reserved for the runner
        self.runner = runner
        self.spec = spec
        self.name = spec.name

    def __repr__(self):
        return "<%s %r>" % (type(self).__name__, self.name)


__all__ = (
    "CommandSpec",
    "NamedCommand",
)
