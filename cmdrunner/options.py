"""
Option declarations accumulated across contributors.

An OptionConfiguration is handed to every contributor of a run (the runner's
defaults, a command's add_options() and, through super() calls, whatever its
base classes declare). Contributors can only add:

- alias groups: names that always carry the same value (e.g. "h" and "help")
- boolean names: presence-only switches, False unless given
- string names: values that are never converted to numbers
- defaults: values for names the command line leaves unset

Sets merge as unions, so two contributors declaring the same boolean is not an
error and loses nothing. Alias groups sharing a name are joined into one group.
A default declared twice keeps the last value.

Example
    >>> options = OptionConfiguration()
    >>> options.add(boolean="v", alias={"v": "verbose"})
    >>> options.add(boolean=["v", "q"], string="out", default={"out": "-"})
    >>> sorted(options.boolean)
    ['q', 'v']
"""
from collections.abc import Iterable, Mapping
from types import MappingProxyType


def _names(value, field):
    """
    normalize one name or an iterable of names into a tuple of strings.
    """
    if isinstance(value, str):
        value = (value,)
    elif not isinstance(value, Iterable):
        raise TypeError("option %r must be a name or an iterable of names" % field)
    names = tuple(value)
    for name in names:
        if not isinstance(name, str):
            raise TypeError("option %r must be a name or an iterable of names" % field)
        if not name or name.startswith("-"):
            raise ValueError("option name %r must be non-empty and given without dashes" % name)
    return names


class OptionConfiguration:
    """
    Additive accumulator of option declarations.

    Read access goes through immutable views (aliases(), boolean, string,
    default) so the tokenizer can read a configuration without being able to
    change it.
    """

    def __init__(self, **declarations):
        self._groups = []
        self._boolean = set()
        self._string = set()
        self._default = {}
        if declarations:
            self.add(**declarations)

    def add(self, *, alias=None, boolean=(), string=(), default=None):
        """
        Declare more options.

        Parameters
        - alias: Mapping[str, str | Iterable[str]] (name -> its other names)
        - boolean: str | Iterable[str]
        - string: str | Iterable[str]
        - default: Mapping[str, Any]

        Every argument is optional; each call only ever adds.
        """
        if alias is not None:
            if not isinstance(alias, Mapping):
                raise TypeError("option 'alias' must be a mapping")
            for name, others in alias.items():
                self._join((*_names(name, "alias"), *_names(others, "alias")))

        self._boolean.update(_names(boolean, "boolean"))
        self._string.update(_names(string, "string"))

        if default is not None:
            if not isinstance(default, Mapping):
                raise TypeError("option 'default' must be a mapping")
            for name in default:
                _names(name, "default")
            self._default.update(default)

    def update(self, other, /):
        """
        Merge every declaration of another configuration into this one.
        """
        if not isinstance(other, OptionConfiguration):
            raise TypeError("update() argument must be an option configuration")
        for group in other._groups:
            self._join(group)
        self._boolean |= other._boolean
        self._string |= other._string
        self._default.update(other._default)

    def _join(self, names):
        group = set(names)
        # any existing group sharing a name is absorbed
        kept = []
        for existing in self._groups:
            if existing & group:
                group |= existing
            else:
                kept.append(existing)
        kept.append(group)
        self._groups = kept

    def aliases(self, name, /):
        """
        Return every name sharing a value with name (itself included).
        """
        for group in self._groups:
            if name in group:
                return frozenset(group)
        return frozenset((name,))

    @property
    def alias(self):
        """
        read-only view: name -> other names, for every aliased name.
        """
        return MappingProxyType({
            name: frozenset(group - {name}) for group in self._groups for name in group
        })

    @property
    def boolean(self):
        return frozenset(self._boolean)

    @property
    def string(self):
        return frozenset(self._string)

    @property
    def default(self):
        return MappingProxyType(dict(self._default))

    def is_boolean(self, name, /):
        return any(other in self._boolean for other in self.aliases(name))

    def is_string(self, name, /):
        return any(other in self._string for other in self.aliases(name))

    def __repr__(self):
        return "OptionConfiguration(alias=%r, boolean=%r, string=%r, default=%r)" % (
            {name: sorted(others) for name, others in sorted(self.alias.items())},
            sorted(self._boolean),
            sorted(self._string),
            self._default,
        )


def add_options(options, declarations, /):
    """
    Merge a mapping of option declarations into a configuration.

    The mapping uses the keys "alias", "boolean", "string" and "default", with
    the shapes OptionConfiguration.add() accepts. Another OptionConfiguration
    is merged whole. Unknown keys are a programming error (TypeError).
    """
    if not isinstance(options, OptionConfiguration):
        raise TypeError("add_options() first argument must be an option configuration")
    if isinstance(declarations, OptionConfiguration):
        return options.update(declarations)
    if not isinstance(declarations, Mapping):
        raise TypeError("add_options() second argument must be a mapping of declarations")
    unknown = set(declarations) - {"alias", "boolean", "string", "default"}
    if unknown:
        raise TypeError("add_options() unknown declaration %r" % sorted(unknown)[0])
    options.add(**declarations)


__all__ = (
    "OptionConfiguration",
    "add_options",
)
