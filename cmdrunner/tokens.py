r"""
Low-level option tokenizer.

parse_options(argv, options) turns a flat argument list into an Arguments
value: a mapping of option values plus the ordered list of leftover
positionals. It follows the conventions of minimist, the de-facto option
tokenizer of many small CLIs:

    --name=value      inline value
    --name value      spaced value (when name is not a boolean)
    --name            True for booleans and undeclared names, "" for strings
    --no-name         False
    -abc              short flags a, b and c; the last one may take a value
    -n5 / -n=5        short option with an attached value
    --                everything after it is positional

Values given to names that are not declared as strings are converted to int
or float when they look like numbers. Positionals are never converted; typing
them is the command's business. A name given more than once collects its values
into a list (booleans just take the last value).

The tokenizer never fails on user input: unknown names are simply recorded.
Malformed declarations are programming errors and raise TypeError.
"""
import re
from collections import deque
from collections.abc import Iterable, MutableMapping

from .options import OptionConfiguration


_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
_HEXADECIMAL = re.compile(r"0[xX][0-9a-fA-F]+")
_ATTACHED_NUMBER = re.compile(r"-?\d+(?:\.\d*)?(?:e-?\d+)?")
_SWITCH = re.compile(r"--?[^-]")


class Arguments(MutableMapping):
    """
    Structured arguments of one invocation.

    - Mapping part: option name (without dashes) -> value. Every alias of a
      name maps to the same value.
    - positionals: list[str], the non-option arguments in command line order.
      Validation hooks consume it; the runner rejects whatever is left.
    """

    def __init__(self, values=(), /, positionals=()):
        self._values = dict(values)
        self.positionals = list(positionals)

    def __getitem__(self, name):
        return self._values[name]

    def __setitem__(self, name, value):
        self._values[name] = value

    def __delitem__(self, name):
        del self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Arguments):
            return NotImplemented
        return self._values == other._values and self.positionals == other.positionals

    __hash__ = None

    def next_positional(self):
        """
        Remove and return the left-most positional; None when exhausted.
        """
        if not self.positionals:
            return None
        return self.positionals.pop(0)

    def __repr__(self):
        return "Arguments(%r, positionals=%r)" % (self._values, self.positionals)


def _convert(text):
    if _HEXADECIMAL.fullmatch(text):
        return int(text, 16)
    if _NUMBER.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            return float(text)
    return text


class _Parser:
    """
    single-use parsing state: the token queue, the result, and which names
    the command line actually set.
    """

    def __init__(self, options, tokens):
        self.options = options
        self.tokens = tokens
        self.args = Arguments()
        self.given = set()

    def value(self, name, text):
        if self.options.is_string(name) or self.options.is_boolean(name):
            return text
        return _convert(text)

    def bare(self, name):
        return "" if self.options.is_string(name) and not self.options.is_boolean(name) else True

    def assign(self, name, value):
        names = self.options.aliases(name)
        if self.options.is_boolean(name):
            if not isinstance(value, bool):
                value = str(value) != "false"
        elif name in self.given and not isinstance(self.args.get(name), bool):
            current = self.args[name]
            value = [*current, value] if isinstance(current, list) else [current, value]
        for other in names:
            self.args[other] = value
        self.given |= names

    def takes_value(self, name):
        return (
            bool(self.tokens) and
            not _SWITCH.match(self.tokens[0]) and
            not self.options.is_boolean(name)
        )

    def takes_boolean(self):
        return bool(self.tokens) and self.tokens[0] in ("true", "false")

    def trailing(self, name):
        # a name at the end of its token: take a following value if it can
        if self.takes_value(name):
            self.assign(name, self.value(name, self.tokens.popleft()))
        elif self.takes_boolean():
            self.assign(name, self.tokens.popleft() == "true")
        else:
            self.assign(name, self.bare(name))

    def short(self, letters):
        for index, letter in enumerate(letters[:-1]):
            rest = letters[index + 1:]
            if rest.startswith("="):
                self.assign(letter, self.value(letter, rest[1:]))
                return
            if letter.isalpha() and _ATTACHED_NUMBER.fullmatch(rest):
                self.assign(letter, self.value(letter, rest))
                return
            if not (rest[0].isalnum() or rest[0] == "_"):
                self.assign(letter, rest)
                return
            self.assign(letter, self.bare(letter))
        if letters[-1] != "-":
            self.trailing(letters[-1])

    def run(self):
        for name in self.options.boolean:
            if name not in self.args:
                value = next(
                    (self.options.default[other] for other in self.options.aliases(name) if other in self.options.default),
                    False
                )
                for other in self.options.aliases(name):
                    self.args[other] = value

        while self.tokens:
            token = self.tokens.popleft()

            if token == "--":
                self.args.positionals.extend(self.tokens)
                self.tokens.clear()
            elif match := re.fullmatch(r"--([^=]+)=(.*)", token, re.DOTALL):
                self.assign(match[1], self.value(match[1], match[2]))
            elif match := re.fullmatch(r"--no-(.+)", token, re.DOTALL):
                self.assign(match[1], False)
            elif match := re.fullmatch(r"--(.+)", token, re.DOTALL):
                self.trailing(match[1])
            elif re.fullmatch(r"-[^-].*", token, re.DOTALL):
                self.short(token[1:])
            else:
                self.args.positionals.append(token)

        for name, value in self.options.default.items():
            names = self.options.aliases(name)
            if not names & self.given:
                for other in names:
                    self.args[other] = value

        return self.args


def parse_options(argv, options, /):
    """
    Tokenize argv according to an OptionConfiguration.

    Parameters
    - argv: Iterable[str] (the arguments, without the program name)
    - options: OptionConfiguration

    Returns
    - Arguments with declared booleans defaulting to False, declared defaults
      applied to names the command line left unset, and positionals in order.

    Raises
    - TypeError: when options is not a configuration or argv holds non-strings.
    """
    if not isinstance(options, OptionConfiguration):
        raise TypeError("parse_options() second argument must be an option configuration")
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("parse_options() first argument must be an iterable of strings")
    tokens = deque(argv)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse_options() first argument must be an iterable of strings")
    return _Parser(options, tokens).run()


__all__ = (
    "Arguments",
    "parse_options",
)
