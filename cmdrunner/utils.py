"""
cmdrunner utilities (small helpers shared by the runner and by commands)

Scope
- Building blocks used across the package and helpers that command
  implementations call from their hooks.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- wrap(text, width)
  • Wrap help text line by line, keeping each line's indentation on its continuations.

- next_positional(args)
  • Take the left-most positional argument out of parsed arguments (None when exhausted).

- confirm(message)
  • Ask a yes/no question on the terminal; "y"/"yes" in any letter case confirms.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> wrap("  a fairly long summary line", 16)
    '  a fairly long\\n  summary line'
"""
import builtins
import functools
import textwrap

from rich.prompt import Prompt


class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        # pickling must hand back the singleton
        return UnsetType, ()

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns object unless it is Unset, in which case default is returned.
    Falsey values like None, 0 or "" are preserved as-is.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> (decorator)

    Raises
    - TypeError on a non-callable target, a non-string name, a callable that
      refuses attribute updates, or a wrong number of arguments.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def wrap(text, width, /):
    """
    Wrap text at the given column, line by line.

    Behavior
    - Each input line is wrapped on its own; blank lines are kept.
    - Continuation lines repeat the leading whitespace of the line they come
      from, so indented summaries stay indented.
    - Words longer than the width are never split.
    - A trailing newline in the input is preserved.

    Parameters
    - text: str
    - width: int (>= 1)

    Returns
    - str: the wrapped text.
    """
    if not isinstance(text, str):
        raise TypeError("wrap() first argument must be a string")
    if not isinstance(width, int) or isinstance(width, bool):
        raise TypeError("wrap() second argument must be an integer")
    if width < 1:
        raise ValueError("wrap() second argument must be positive")

    lines = []
    for line in text.split("\n"):
        if not line.strip():
            lines.append("")
            continue
        indent = line[:len(line) - len(line.lstrip())]
        lines.append(textwrap.fill(
            line.strip(),
            width,
            initial_indent=indent,
            subsequent_indent=indent,
            break_long_words=False,
            break_on_hyphens=False,
        ))
    return "\n".join(lines)


def next_positional(args, /):
    """
    Remove and return the left-most positional argument of parsed arguments.

    Repeated calls deplete args.positionals in order. Returns None once the
    positionals are exhausted.
    """
    if not args.positionals:
        return None
    return args.positionals.pop(0)


def confirm(message, /, *, console=None):
    """
    Display a yes/no question and wait for the user to answer.

    The question is suffixed with "(y/n)" and defaults to "n". Answering "y"
    or "yes" in any letter case confirms; anything else declines.

    Parameters
    - message: str
    - console: rich.console.Console | None (the prompt's console; rich's default when None)

    Returns
    - bool: True when confirmed.
    """
    answer = Prompt.ask("%s (y/n)" % message, console=console, default="n", show_default=False)
    return answer.strip().lower() in ("y", "yes")


Unset = UnsetType()
"""
The single Unset instance. Use it as a default when None is a meaningful value.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "wrap",
    "next_positional",
    "confirm",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
