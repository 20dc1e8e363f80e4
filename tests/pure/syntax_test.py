import unittest

from minicaml.lang.error import ParseError
from minicaml.pure.lexical import tokenize
from minicaml.pure.syntax import Arith, BoolLit, Equality, GlobalBind, IntLit, ListLit, LocalBind, Ref, parse
from minicaml.pure.value import NIL, ConsList


def parse_expr(expr):
    return parse(tokenize(expr))


class ParserTestCase(unittest.TestCase):

    def test_primaries(self):
        cases = {
            "42": IntLit(42),
            "true": BoolLit(True),
            "false": BoolLit(False),
            "foo": Ref("foo"),
            "[]": ListLit(NIL),
            "[1; 2; 3]": ListLit(ConsList.from_iterable([1, 2, 3])),
            "((7))": IntLit(7),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expr(case), case)

    def test_precedence(self):
        # 2+3*4-5 = (2 + (3 * 4)) - 5
        expected = Arith("-", Arith("+", IntLit(2), Arith("*", IntLit(3), IntLit(4))), IntLit(5))
        self.assertEqual(expected, parse_expr("2+3*4-5"))

        # equality binds tighter than everything else
        expected = Arith("+", Equality("==", Ref("a"), Ref("b")), Ref("c"))
        self.assertEqual(expected, parse_expr("a == b + c"))

        expected = Arith("*", IntLit(2), Equality("!=", IntLit(3), IntLit(4)))
        self.assertEqual(expected, parse_expr("2 * 3 != 4"))

        expected = Arith("*", Arith("+", IntLit(1), IntLit(2)), IntLit(3))
        self.assertEqual(expected, parse_expr("(1 + 2) * 3"))

    def test_left_associativity(self):
        cases = {
            "1 - 2 - 3": Arith("-", Arith("-", IntLit(1), IntLit(2)), IntLit(3)),
            "8 / 4 / 2": Arith("/", Arith("/", IntLit(8), IntLit(4)), IntLit(2)),
            "1 == 1 == true": Equality("==", Equality("==", IntLit(1), IntLit(1)), BoolLit(True)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expr(case), case)

    def test_bindings(self):
        cases = {
            "let foo = 42": GlobalBind("foo", IntLit(42)),
            "let foo = 1 + 2": GlobalBind("foo", Arith("+", IntLit(1), IntLit(2))),
            "let f x y = x": GlobalBind("f", Ref("x"), ("x", "y")),
            "let x = 5 in x": LocalBind("x", IntLit(5), Ref("x")),
            "let a = 1 in let b = 2 in a + b": LocalBind(
                "a", IntLit(1), LocalBind("b", IntLit(2), Arith("+", Ref("a"), Ref("b")))
            ),
            "let f x = x in f": LocalBind("f", Ref("x"), Ref("f"), ("x",)),
            "(let foo = 1)": GlobalBind("foo", IntLit(1)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expr(case), case)

    def test_parse_errors(self):
        should_raise = [
            "",                 # nothing to parse
            "let = 1",          # no identifier after let
            "let 1 = 1",
            "let",
            "let foo 1",        # no '=' after name
            "let foo",
            "let foo =",
            "[1 2]",            # missing ';'
            "[1; 2",            # unterminated list
            "[1;",
            "[1; ]",
            "[true]",           # list elements are ints only
            "[",
            "(1 + 2",           # unterminated parenthesis
            "(",
            "1 2",              # trailing tokens
            "123abc",
            "1 + 2 )",
            "1 +",
            "1 + let x = 1 in x",
            "in",
            "let x = let y = 1 in y in x",
        ]
        for case in should_raise:
            self.assertRaises(ParseError, parse_expr, case)


if __name__ == '__main__':
    unittest.main()
