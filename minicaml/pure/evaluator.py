"""Tree-walking evaluation of minicaml syntax trees, and printing of results the way a toplevel does:

```
# 2 + 3 * 4;;
- : int = 14
# let foo = [1; 2];;
val foo : int list = [1; 2]
```
"""

from dataclasses import dataclass
from typing import Optional

from minicaml.lang.error import BoundaryError, DivisionByZeroError, EvaluationError, ParseError, TypeMismatchError
from minicaml.pure.lexical import tokenize
from minicaml.pure.syntax import Arith, BoolLit, Equality, GlobalBind, IntLit, ListLit, LocalBind, Ref, parse
from minicaml.pure.value import Bool, Fn, Int, List, wrap


TERMINATOR = ";;"


@dataclass(frozen=True)
class Output:
    """Result of evaluating a node: a value, plus the name it was bound to if the node was a binding."""
    name: Optional[str]
    value: object

    @property
    def named(self):
        return self.name is not None

    def __str__(self):
        prefix = f"val {self.name}" if self.named else "-"
        return f"{prefix} : {self.value.type_name} = {self.value}"


def _operand(output, node):
    """Value of output, used as an operand of node. Raises TypeMismatchError if output is a binding."""
    if output.named:
        raise TypeMismatchError("binding of '{}' cannot be an operand of '{}'", (output.name, node.op))
    return output.value


def _arith(op, lhs, rhs):
    if op == "+":
        return wrap(lhs + rhs)
    elif op == "-":
        return wrap(lhs - rhs)
    elif op == "*":
        return wrap(lhs * rhs)

    if rhs == 0:
        raise DivisionByZeroError("division by zero")
    quotient = abs(lhs) // abs(rhs)  # truncates toward zero, unlike //
    return wrap(quotient if (lhs < 0) == (rhs < 0) else -quotient)


def _apply(node, lhs, rhs):
    """Applies the operator of an Arith or Equality node to already evaluated operands."""
    if isinstance(node, Arith):
        if not (isinstance(lhs, Int) and isinstance(rhs, Int)):
            msg = "operator '{}' expects operands of type int, got {} and {}"
            raise TypeMismatchError(msg, (node.op, lhs.type_name, rhs.type_name))
        return Output(None, Int(_arith(node.op, lhs.value, rhs.value)))

    if not (isinstance(lhs, Int) and isinstance(rhs, Int) or isinstance(lhs, Bool) and isinstance(rhs, Bool)):
        msg = "operator '{}' expects two operands of type int or bool, got {} and {}"
        raise TypeMismatchError(msg, (node.op, lhs.type_name, rhs.type_name))
    equal = lhs.value == rhs.value
    return Output(None, Bool(equal if node.op == "==" else not equal))


def _eval_operators(node, env):
    """Evaluates a left-nested chain of operators such as 1 + 2 - 3 + 4 without recursing down its left spine:
    the innermost operand is evaluated first, then each right operand in turn.
    """
    spine = []
    while isinstance(node, (Arith, Equality)):
        spine.append(node)
        node = node.lhs

    output = eval_ast(node, env)
    for op_node in reversed(spine):
        lhs = _operand(output, op_node)
        rhs = _operand(eval_ast(op_node.rhs, env), op_node)
        output = _apply(op_node, lhs, rhs)
    return output


def _bound_value(node, env):
    """Value that a binding node binds its name to."""
    if node.args:
        return Fn()  # function bodies are never evaluated

    output = eval_ast(node.expr, env)
    if output.named:
        raise TypeMismatchError("binding of '{}' cannot be bound to '{}'", (output.name, node.name))
    return output.value


def eval_ast(node, env):
    """Evaluates node against env and returns an Output. Global bindings are written to env; local bindings are
    evaluated in an extended copy of env and leave it untouched.
    """
    while isinstance(node, LocalBind):
        env = env.extend(node.name, _bound_value(node, env))
        node = node.scope

    if isinstance(node, IntLit):
        return Output(None, Int(node.value))

    elif isinstance(node, BoolLit):
        return Output(None, Bool(node.value))

    elif isinstance(node, ListLit):
        return Output(None, List(node.items))

    elif isinstance(node, (Arith, Equality)):
        return _eval_operators(node, env)

    elif isinstance(node, Ref):
        return Output(None, env.lookup(node.name))

    elif isinstance(node, GlobalBind):
        value = _bound_value(node, env)
        env.bind(node.name, value)
        return Output(node.name, value)

    raise TypeError(f"cannot evaluate {node!r}")


def strip_terminator(statement):
    """Returns the text of statement preceding its first ';;', stripped. Raises BoundaryError if there is none."""
    if TERMINATOR not in statement:
        raise BoundaryError("'{}' must end with ';;'", statement.strip(), diagnosis=False)
    return statement[:statement.index(TERMINATOR)].strip()


def evaluate(statement, env):
    """Lexes, parses and evaluates one ';;'-terminated statement against env. Returns the rendered result."""
    expr = strip_terminator(statement)

    try:
        node = parse(tokenize(expr))
    except RecursionError:
        raise ParseError("expression nested too deeply")

    try:
        return str(eval_ast(node, env))
    except RecursionError:
        raise EvaluationError("expression nested too deeply")
