"""Lexical analysis for minicaml. Converts a single statement (with its ';;' terminator already stripped) into a flat
list of tokens.

Tokens can be loosely defined as follows:

```
<number>  ::= [0-9]+                       ; must fit in a signed 64-bit integer
<keyword> ::= "let" | "in" | "true" | "false"
<ident>   ::= [A-Za-z]+                    ; any alphabetic run that isn't a keyword
<punct>   ::= "==" | "!=" | "+" | "-" | "*" | "/" | "=" | "[" | "]" | ";" | "(" | ")"
```

Whitespace separates tokens but is otherwise ignored. Tokens do not carry positions.
"""

import re

from minicaml.lang.error import LexError


INT_MAX = 2 ** 63 - 1


class Token:
    """Superclass representing any token in minicaml."""

    def __init__(self, expr):
        self.expr = expr
        self._cls = type(self).__name__

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.expr == self.expr

    def __hash__(self):
        return hash((self._cls, self.expr))


class Number(Token):
    """Integer literal."""

    def __init__(self, expr):
        super().__init__(str(expr))
        self.value = int(expr)


class Punct(Token):
    """Punctuator. Two-character punctuators come first so that '==' is never read as '=' '='."""
    TOKENS = ["==", "!=", "+", "-", "*", "/", "=", "[", "]", ";", "(", ")"]


class Keyword(Token):
    """Reserved word."""
    TOKENS = ["let", "in", "true", "false"]


class Ident(Token):
    """Identifier: any alphabetic run that isn't a Keyword."""


WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")
DIGITS = re.compile(r"[0-9]+")
ALPHAS = re.compile(r"[A-Za-z]+")


def tokenize(expr):
    """Returns list of Tokens in expr, scanned left to right. Raises LexError on the first character that cannot begin
    a token, or on a digit run that doesn't fit in a signed 64-bit integer.
    """
    tokens = []
    pos = 0

    while pos < len(expr):
        match = WHITESPACE.match(expr, pos)
        if match:
            pos = match.end()
            continue

        match = DIGITS.match(expr, pos)
        if match:
            digits = match.group()
            if int(digits) > INT_MAX:
                msg = "failed to parse '{1}' into a 64-bit integer"
                raise LexError(msg, (expr, digits), start=pos, end=match.end())
            tokens.append(Number(digits))
            pos = match.end()
            continue

        match = ALPHAS.match(expr, pos)
        if match:
            word = match.group()
            tokens.append(Keyword(word) if word in Keyword.TOKENS else Ident(word))
            pos = match.end()
            continue

        for punct in Punct.TOKENS:
            if expr.startswith(punct, pos):
                tokens.append(Punct(punct))
                pos += len(punct)
                break
        else:
            raise LexError("failed to tokenize '{1}'", (expr, expr[pos:]), start=pos, end=pos + 1)

    return tokens
