"""
cmdrunner faults (command errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
- CommandError: "the command cannot complete". Reported through the completion
  callback, never a defect.
- UsageError: "the user's input was invalid". Raised from validation hooks and
  produced by command selection; renders with a hint pointing at --help.
- UnknownCommandError / UnexpectedArgumentError: the two usage errors the
  runner manufactures itself.
- report(): print any CommandError to stderr through rich.

Hierarchy
    CommandError
    └── UsageError
        ├── UnknownCommandError
        └── UnexpectedArgumentError

Integration
- Commands raise UsageError from parse_args() and pass CommandError instances to
  their completion callback from do_command().
- Setup mistakes (duplicate names, malformed syntax) are not faults: they raise
  ValueError/TypeError at registration time.
- The host application may tune rendering through __main__:
  __prog__ (program label), __styles__ (style overrides), __codes__ (code labels).
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum

from rich.console import Console, Group
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes used across the runner (stable identifiers).

    grouping
    - command failures (1100x): COMMAND_FAILED
    - usage (1110x): INVALID_USAGE, UNKNOWN_COMMAND, MISSING_COMMAND, UNEXPECTED_ARGUMENT

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- command failures ---
    COMMAND_FAILED      = 11001

    # --- usage errors ---
    INVALID_USAGE       = 11101
    UNKNOWN_COMMAND     = 11102
    MISSING_COMMAND     = 11103
    UNEXPECTED_ARGUMENT = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


def _prog():
    main = sys.modules.get("__main__")
    prog = getattr(main, "__prog__", None)
    if prog:
        return str(prog)
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "cmdrunner"


class CommandError(Exception):
    """
    Error that prevents the command from completing.

    Parameters
    - message: str
    - hint: str | None (one actionable sentence shown under the message)
    - code: FaultCode | None (defaults to the class-level code)
    """
    code = FaultCode.COMMAND_FAILED
    title = "command failed"
    hint = None

    def __init__(self, message, /, *, hint=None, code=None):
        if not isinstance(message, str):
            raise TypeError("%s() argument must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        if hint is not None:
            self.hint = hint
        if code is not None:
            self.code = FaultCode(code)

    def __str__(self):
        return self.message

    def __rich__(self, colorful=True):
        main = sys.modules.get("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(_prog(), "prog-name"),
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))
        return Group(*renders)


class UsageError(CommandError):
    """
    Command line usage error: the user's input was invalid.
    """
    code = FaultCode.INVALID_USAGE
    title = "invalid usage"
    hint = "run with -h for help"


class UnknownCommandError(UsageError):
    """
    The first argument named no registered command.
    """
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"

    def __init__(self, name, /, **options):
        super().__init__("unrecognized command '%s'" % name, **options)
        self.name = name


class UnexpectedArgumentError(UsageError):
    """
    More positional arguments were supplied than the command accepts.
    """
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"
    hint = "remove the extra value or run with -h to see the expected usage"

    def __init__(self, argument, /, **options):
        super().__init__('unexpected argument "%s"' % argument, **options)
        self.argument = argument


def report(error, /, *, colorful=True, console=None):
    """
    print a command error to stderr (or to the given console).

    contract
    - error must be a CommandError; anything else is a defect and is rejected
      with TypeError so it cannot be mistaken for a user-facing condition.
    """
    if not isinstance(error, CommandError):
        raise TypeError("report() argument must be a command error")
    if console is None:
        console = Console(stderr=True, highlight=False)
    console.print(error.__rich__(colorful=colorful))


__all__ = (
    "FaultCode",
    "CommandError",
    "UsageError",
    "UnknownCommandError",
    "UnexpectedArgumentError",
    "report",
)
