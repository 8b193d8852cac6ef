# PatternTable.py
"""""
Regular expressions used by the rewrite loop.

All patterns are compiled once at import time. The `find_*` helpers return the
leftmost match of their category (an `re.Match`) or None. No parse tree is
built: a match is just a span of the expression buffer.

Operand syntax everywhere: a signed decimal literal or (-)Infinity.
Bracket contents never contain '(' or ')', so every bracket match is innermost.
"""""

import re


FUNCTION_NAMES = ("cotan", "cosh", "sinh", "tanh", "log", "ln", "sin", "cos", "tan")

# Longest names first, otherwise "sin" would shadow "sinh"
_FUNCTION = "|".join(sorted(FUNCTION_NAMES, key=len, reverse=True))
_NUMBER = r"[-+]?[0-9.]+|-?Infinity"
_SIMPLE_CHAR = r"[0-9.+\-*/!^]|Infinity"
_POWER_OPERAND = r"(?:[-+]?[0-9.]+|-?Infinity)!*"


# -----------------------------
# Reducible forms, in the order the rewrite loop drains them
# -----------------------------

# sin(0.5), ln(-Infinity) ...
FUNCTION = re.compile(rf"(?<![a-z])({_FUNCTION})\(({_NUMBER})\)")

# (3)root(27)
ROOT = re.compile(rf"\(({_NUMBER})\)root\(({_NUMBER})\)")

# (5)!
BRACKET_FACTORIAL = re.compile(rf"\(({_NUMBER})\)!")

# (-2)^3, (2)^3^2, (2)^-3!
BRACKET_POWER = re.compile(
    rf"\(({_NUMBER})\)\^({_POWER_OPERAND}(?:\^{_POWER_OPERAND})*)(?![0-9.^!])")

# (8+13*-2), () ; at least one operator must follow the first operand
SIMPLE_EXPRESSION = re.compile(
    rf"\((|[-+]*(?:[0-9.]|Infinity)+[+\-*/!^](?:{_SIMPLE_CHAR})*)\)")

# (7), (-7) ; negative values keep their brackets in front of '^' and '!'
CONSTANT = re.compile(
    r"(?<![a-z])\((?:([0-9.]+|Infinity)\)(?!root)|([-+][0-9.]+|[-+]Infinity)\)(?![!^]|root))")


# -----------------------------
# Normalization
# -----------------------------

CONSTANTS = {
    "PI": re.compile(r"PI"),
    "E": re.compile(r"E"),
}

RANDOM = re.compile(r"RAND")

# 2.5e-3 -> (2.5*10^-3)
E_TYPE = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)e([-+]?[0-9]+)")

# 3log(2) -> 3*log(2), 2(3) -> 2*(3), )( -> )*(
MULTIPLYING_BEFORE_FUNCTION = re.compile(
    rf"(?:(?<=[0-9.)!])|(?<=Infinity))(?=(?:{_FUNCTION})\(|\()")

# (2)3 -> (2)*3, 3!4 -> 3!*4
MULTIPLYING_BEFORE_NUMBER = re.compile(r"(?<=[)!])(?=[0-9.]|Infinity)")

# Whitespace between two digits stays, "2 3" is not "23"
WHITESPACE = re.compile(r"\s+(?![\s0-9.])|(?<![\s0-9.])\s+")


# -----------------------------
# Whole-buffer checks
# -----------------------------

FULL_SIMPLE_EXPRESSION = re.compile(rf"^(?:{_SIMPLE_CHAR})*$")

SIGN_PAIR = re.compile(r"[-+]{2}")

PRODUCT_OPERATOR = re.compile(r"([*/])")


def brackets_error(problem):
    """Return True if brackets are unbalanced or close before they open."""
    depth = 0
    for char in problem:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return True
    return depth != 0


def is_full_simple_expression(problem):
    return FULL_SIMPLE_EXPRESSION.match(problem) is not None


def find_function(problem):
    return FUNCTION.search(problem)


def find_root(problem):
    return ROOT.search(problem)


def find_bracket_factorial(problem):
    return BRACKET_FACTORIAL.search(problem)


def find_bracket_power(problem):
    return BRACKET_POWER.search(problem)


def find_simple_expression(problem):
    return SIMPLE_EXPRESSION.search(problem)


def find_constant(problem):
    return CONSTANT.search(problem)


def find_e_type(problem):
    return E_TYPE.search(problem)
