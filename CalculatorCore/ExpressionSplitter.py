# ExpressionSplitter.py
"""""
Splitter for simple expressions.

A simple expression contains only signed decimal literals (or Infinity) and the
operators + - * / ^ !. It has no brackets and no function names.

Pipeline
--------
1) plus_minus_axiom: collapse sign chains ("3+--2" -> "3+2").
2) Negative marker: "*-", "/-", "^-" become "*N", "/N", "^N". The marker is
   consumed only when a leaf is parsed into a number.
3) split_expression: split by the lowest precedence operator first
   (+, then -, then * /, then ^, then !) into an operation tree.
4) evaluate: walk the tree bottom-up and apply the numeric primitives.
"""""

from . import ScientificEngine
from . import PatternTable
from . import error as E


NEGATIVE = "N"


# -----------------------------
# Operation tree
# -----------------------------

class Number:
    """Leaf of the operation tree: a signed float."""
    def __init__(self, value):
        self.value = float(value)

    def __eq__(self, other):
        return isinstance(other, Number) and self.value == other.value

    def __repr__(self):
        return f"Number({self.value!r})"


class Operation:
    """Interior node: an operator applied to an ordered list of operands.

    '+', '-', '*' and '/' take any number of operands, '^' exactly two and
    '!' exactly one.
    """
    def __init__(self, operator, operands):
        self.operator = operator
        self.operands = list(operands)

    def apply(self, values):
        """Apply this node's operator to already evaluated operand values."""
        if self.operator == '+':
            return ScientificEngine.add(values)
        elif self.operator == '-':
            return ScientificEngine.subtract(values)
        elif self.operator == '*':
            return ScientificEngine.multiply(values)
        elif self.operator == '/':
            return ScientificEngine.divide(values)
        elif self.operator == '^':
            if len(values) != 2:
                raise E.MissingOperandError("Power needs a base and an exponent", code="ERR:MISSINGOPERAND")
            return ScientificEngine.power(values[0], values[1])
        elif self.operator == '!':
            if len(values) != 1:
                raise E.MissingOperandError("Factorial needs exactly one operand", code="ERR:MISSINGOPERAND")
            return ScientificEngine.factorize(values[0])
        else:
            raise E.MathError(f"Unknown operator: {self.operator}", code="ERR:ERROR")

    def __eq__(self, other):
        return (isinstance(other, Operation) and self.operator == other.operator
                and self.operands == other.operands)

    def __repr__(self):
        return f"Operation({self.operator!r}, {self.operands!r})"


def evaluate(tree):
    """Evaluate an operation tree in post-order, without recursion."""
    results = {}
    stack = [(tree, False)]

    while stack:
        node, operands_done = stack.pop()

        if isinstance(node, Number):
            results[id(node)] = node.value
        elif operands_done:
            values = [results.pop(id(operand)) for operand in node.operands]
            results[id(node)] = node.apply(values)
        else:
            stack.append((node, True))
            for operand in reversed(node.operands):
                stack.append((operand, False))

    return results[id(tree)]


# -----------------------------
# Sign handling
# -----------------------------

def plus_minus_axiom(problem):
    """Replace every chain of '+'/'-' by the single sign it amounts to. Idempotent."""
    # Each round shortens the string, so len(problem) rounds always suffice
    for _ in range(len(problem)):
        if not PatternTable.SIGN_PAIR.search(problem):
            break
        problem = problem.replace("++", "+").replace("+-", "-").replace("-+", "-").replace("--", "+")
    return problem


def mark_negative_operands(problem):
    problem = problem.replace("*+", "*").replace("/+", "/").replace("^+", "^")
    for operator in ("*", "/", "^"):
        problem = problem.replace(operator + "-", operator + NEGATIVE)
    return problem


# -----------------------------
# Splitting
# -----------------------------

def missing_operand(problem):
    return E.MissingOperandError(f"Missing operand in '{problem}'", code="ERR:MISSINGOPERAND")


def operator_containment_check(problem):
    """Return the lowest precedence operator tier present in problem, or None."""
    for operator in ("+", "-", "*", "/", "^", "!"):
        if operator in problem:
            if operator == "/":
                return "*"  # '*' and '/' share one tier
            return operator
    return None


def parse_number(problem):
    """Parse a leaf, honoring the negative marker."""
    negative = problem.startswith(NEGATIVE)
    text = problem[1:] if negative else problem

    try:
        value = float(text)
    except ValueError:
        raise missing_operand(problem)

    return Number(-value if negative else value)


def split_sum(problem):
    pieces = problem.split("+")
    if pieces[0] == "":
        pieces = pieces[1:]  # unary plus
    if "" in pieces:
        raise missing_operand(problem)

    operands = [split_expression(piece) for piece in pieces]
    if len(operands) == 1:
        return operands[0]
    return Operation("+", operands)


def split_difference(problem):
    pieces = problem.split("-")
    negate_first = pieces[0] == ""
    if negate_first:
        pieces = pieces[1:]
    if "" in pieces:
        raise missing_operand(problem)

    operands = [split_expression(piece) for piece in pieces]
    if negate_first:
        # A leading '-' belongs to the whole first term: -2^2 is -(2^2)
        operands[0] = Operation("-", [operands[0]])
    if len(operands) == 1:
        return operands[0]
    return Operation("-", operands)


def split_product(problem):
    """Split a '*' / '/' chain, folding left to right ("a/b*c" is "(a/b)*c")."""
    pieces = PatternTable.PRODUCT_OPERATOR.split(problem)
    operands_text = pieces[0::2]
    operators = pieces[1::2]

    # A leading operator leaves no operand in front of it; the arity check of
    # the primitive decides whether what remains is enough.
    current_operator = operators[0]
    if operands_text[0] == "":
        operands = []
    else:
        operands = [split_expression(operands_text[0])]

    for operator, text in zip(operators, operands_text[1:]):
        if text == "":
            raise missing_operand(problem)
        if operator != current_operator:
            operands = [Operation(current_operator, operands)]
            current_operator = operator
        operands.append(split_expression(text))

    return Operation(current_operator, operands)


def split_power(problem):
    """Split a '^' chain; powers associate to the right ("2^3^2" is "2^(3^2)")."""
    pieces = problem.split("^")
    if pieces[0] == "":
        pieces = pieces[1:]
    if "" in pieces:
        raise missing_operand(problem)

    if len(pieces) == 1:
        return Operation("^", [split_expression(pieces[0])])

    tree = split_expression(pieces[-1])
    for piece in reversed(pieces[:-1]):
        tree = Operation("^", [split_expression(piece), tree])
    return tree


def split_factorial(problem):
    operand = problem.rstrip("!")
    if operand == "" or "!" in operand:
        raise missing_operand(problem)

    tree = split_expression(operand)
    for _ in range(len(problem) - len(operand)):
        tree = Operation("!", [tree])
    return tree


SPLITTERS = {
    "+": split_sum,
    "-": split_difference,
    "*": split_product,
    "^": split_power,
    "!": split_factorial,
}


def split_expression(problem):
    """Split a prepared simple expression into an operation tree."""
    if problem == "":
        raise missing_operand(problem)

    operator = operator_containment_check(problem)
    if operator is None:
        return parse_number(problem)
    return SPLITTERS[operator](problem)


def split_simple_expression(problem):
    """Main API: simple expression text -> operation tree."""
    problem = plus_minus_axiom(problem)
    problem = mark_negative_operands(problem)
    return split_expression(problem)


def split_exponent(problem):
    """Split the chain that follows a '^', e.g. "-3^2" in "(x)^-3^2"."""
    return split_simple_expression(mark_negative_operands("^" + problem)[1:])


def calculate_simple_expression(problem):
    return evaluate(split_simple_expression(problem))
