"""Syntax tree of minicaml and the recursive-descent parser that builds it from tokens.

Grammar, from loosest to tightest binding:

```
<expr>     ::= <bind>
<bind>     ::= "let" <ident> <ident>* "=" <add> ("in" <expr>)?  ; without "in": global binding
             | <add>                                             ; with "in": local binding scoping <expr>
<add>      ::= <mul> (("+" | "-") <mul>)*
<mul>      ::= <equality> (("*" | "/") <equality>)*
<equality> ::= <primary> (("==" | "!=") <primary>)*              ; binds tighter than "*" and "/"
<primary>  ::= <number> | "true" | "false" | <ident> | <list> | "(" <expr> ")"
<list>     ::= "[" (<number> (";" <number>)*)? "]"
```

All binary operators associate to the left: 1 - 2 - 3 = (1 - 2) - 3. Note that equality sits below multiplication,
so `a == b + c` is `(a == b) + c`, which is a type error once evaluated.
"""

from dataclasses import dataclass
from typing import Tuple

from minicaml.lang.error import ParseError
from minicaml.pure.lexical import Ident, Keyword, Number, Punct
from minicaml.pure.value import ConsList


class Node:
    """Superclass of every syntax tree node."""


@dataclass(frozen=True)
class IntLit(Node):
    value: int


@dataclass(frozen=True)
class BoolLit(Node):
    value: bool


@dataclass(frozen=True)
class ListLit(Node):
    items: ConsList


@dataclass(frozen=True)
class Arith(Node):
    """Binary arithmetic: op is one of Arith.OPS."""
    OPS = ("+", "-", "*", "/")

    op: str
    lhs: Node
    rhs: Node


@dataclass(frozen=True)
class Equality(Node):
    """Binary (in)equality: op is one of Equality.OPS."""
    OPS = ("==", "!=")

    op: str
    lhs: Node
    rhs: Node


@dataclass(frozen=True)
class Ref(Node):
    name: str


@dataclass(frozen=True)
class GlobalBind(Node):
    """`let name args = expr`. Non-empty args mark a function definition."""
    name: str
    expr: Node
    args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LocalBind(Node):
    """`let name args = expr in scope`."""
    name: str
    expr: Node
    scope: Node
    args: Tuple[str, ...] = ()


class Parser:
    """Recursive-descent parser over a list of tokens. One method per grammar rule; each consumes the tokens of its
    rule and returns the resulting Node.
    """

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0

    def peek(self):
        """Returns the current token, or None if all tokens have been consumed."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def next(self):
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def accept(self, token):
        """Consumes and returns the current token if it equals token, else returns None."""
        if self.peek() == token:
            return self.next()
        return None

    def expect(self, token, msg):
        """Like accept, but raises ParseError with msg if the current token is not token."""
        found = self.accept(token)
        if found is None:
            raise ParseError(msg, self._remaining())
        return found

    def _remaining(self):
        rest = " ".join(str(token) for token in self.tokens[self.pos:])
        return rest if rest else "<end of input>"

    def parse(self):
        """Parses every token into a single expression. Raises ParseError if tokens are left over."""
        node = self.parse_expr()
        if self.peek() is not None:
            raise ParseError("unexpected trailing tokens '{}'", self._remaining())
        return node

    def parse_expr(self):
        return self.parse_bind()

    def parse_bind(self):
        if not self.accept(Keyword("let")):
            return self.parse_add()

        name = self.next()
        if not isinstance(name, Ident):
            found = name.expr if name else "<end of input>"
            raise ParseError("expected an identifier after 'let', found '{}'", found)

        args = []
        while isinstance(self.peek(), Ident):
            args.append(self.next().expr)

        self.expect(Punct("="), f"expected '=' after 'let {name}', found '{{}}'")
        expr = self.parse_add()

        if self.accept(Keyword("in")):
            return LocalBind(name.expr, expr, self.parse_expr(), tuple(args))
        return GlobalBind(name.expr, expr, tuple(args))

    def parse_add(self):
        node = self.parse_mul()
        while self.peek() in (Punct("+"), Punct("-")):
            op = self.next().expr
            node = Arith(op, node, self.parse_mul())
        return node

    def parse_mul(self):
        node = self.parse_equality()
        while self.peek() in (Punct("*"), Punct("/")):
            op = self.next().expr
            node = Arith(op, node, self.parse_equality())
        return node

    def parse_equality(self):
        node = self.parse_primary()
        while self.peek() in (Punct("=="), Punct("!=")):
            op = self.next().expr
            node = Equality(op, node, self.parse_primary())
        return node

    def parse_primary(self):
        token = self.next()

        if isinstance(token, Number):
            return IntLit(token.value)
        elif token == Keyword("true"):
            return BoolLit(True)
        elif token == Keyword("false"):
            return BoolLit(False)
        elif isinstance(token, Ident):
            return Ref(token.expr)
        elif token == Punct("["):
            return self.parse_list()
        elif token == Punct("("):
            node = self.parse_expr()
            self.expect(Punct(")"), "unterminated parenthesis: expected ')', found '{}'")
            return node

        if token is None:
            raise ParseError("expected an expression, found '{}'", "<end of input>")
        self.pos -= 1
        raise ParseError("expected an expression, found '{}'", self._remaining())

    def parse_list(self):
        """Parses list elements; the opening '[' has already been consumed."""
        items = []
        if self.accept(Punct("]")):
            return ListLit(ConsList.from_iterable(items))

        while True:
            token = self.next()
            if not isinstance(token, Number):
                found = token.expr if token else "<end of input>"
                raise ParseError("expected an integer list element, found '{}'", found)
            items.append(token.value)

            if self.accept(Punct("]")):
                return ListLit(ConsList.from_iterable(items))
            elif self.peek() is None:
                raise ParseError("unterminated list: expected ']', found '{}'", "<end of input>")
            self.expect(Punct(";"), "expected ';' between list elements, found '{}'")


def parse(tokens):
    """Returns the syntax tree of tokens. Raises ParseError if tokens aren't a single valid expression."""
    return Parser(tokens).parse()
