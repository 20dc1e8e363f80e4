"""Runtime values of minicaml and the environment used to resolve names.

Every value knows its own type name and textual representation, which is all that is needed to print a valuation
such as `- : int list = [1; 2; 3]`.
"""

from dataclasses import dataclass

from minicaml.lang.error import UnboundNameError


INT_MIN = -2 ** 63
INT_BITS = 64


def wrap(num):
    """Wraps num into a signed 64-bit integer (two's complement overflow)."""
    return (num - INT_MIN) % 2 ** INT_BITS + INT_MIN


class ConsList:
    """Immutable singly-linked list of ints. Only ever built by prepending, so a list is either NIL or a Cons."""

    @staticmethod
    def from_iterable(items):
        """Builds a ConsList with the same front-to-back order as items."""
        lst = NIL
        for item in reversed(list(items)):
            lst = lst.cons(item)
        return lst

    def cons(self, head):
        return Cons(head, self)

    def __iter__(self):
        node = self
        while isinstance(node, Cons):
            yield node.head
            node = node.tail

    def __str__(self):
        return "[" + "; ".join(str(item) for item in self) + "]"


@dataclass(frozen=True)
class Cons(ConsList):
    head: int
    tail: ConsList


class Nil(ConsList):
    """Empty list marker. Use NIL rather than instantiating."""

    def __eq__(self, other):
        return isinstance(other, Nil)

    def __hash__(self):
        return hash(Nil)

    def __repr__(self):
        return "NIL"


NIL = Nil()


class Value:
    """Superclass of every runtime value."""
    type_name = None


@dataclass(frozen=True)
class Int(Value):
    value: int
    type_name = "int"

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Bool(Value):
    value: bool
    type_name = "bool"

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class List(Value):
    items: ConsList
    type_name = "int list"

    def __str__(self):
        return str(self.items)


@dataclass(frozen=True)
class Fn(Value):
    """Opaque function marker: carries neither body nor closure, and can't be applied. No type inference is done, so
    the type name is a fixed placeholder.
    """
    type_name = "'a -> 'b"

    def __str__(self):
        return "<fun>"


class Environment:
    """Maps names to Values. The top-level Environment is owned by a Session and mutated by global bindings; local
    bindings never touch it and work on an extended copy instead.
    """

    def __init__(self, bindings=None):
        self.bindings = dict(bindings) if bindings else {}

    def lookup(self, name):
        """Returns the Value bound to name. Raises UnboundNameError if there is none."""
        try:
            return self.bindings[name]
        except KeyError:
            raise UnboundNameError("unbound value '{}'", name)

    def bind(self, name, value):
        """In-place (re)binding of name: last write wins."""
        self.bindings[name] = value

    def extend(self, name, value):
        """Returns a copy of self with name bound to value, shadowing any existing binding. self is left untouched."""
        child = Environment(self.bindings)
        child.bind(name, value)
        return child

    def clear(self):
        self.bindings.clear()

    def __contains__(self, name):
        return name in self.bindings

    def __len__(self):
        return len(self.bindings)

    def __iter__(self):
        return iter(self.bindings.items())

    def __repr__(self):
        return f"Environment({self.bindings})"
