# MathEngine.py
"""""
Core calculation engine of the calculator.

The engine does not build a parse tree for the whole input. It rewrites the
expression string instead, collapsing the innermost reducible pieces until a
single number is left.

Pipeline
--------
1) Normalize (once): bracket check, constants (PI, E), RAND, implicit
   multiplication, scientific notation.
2) Reduce (repeated passes): function calls, roots, bracketed factorials,
   bracketed powers, bracketed simple groups, redundant brackets, sign chains.
   Every computed value is written back as "(value)".
3) Finalize: evaluate the remaining simple expression and round it to the
   configured number of significant digits.

Errors are MathError subclasses carrying one of the codes in error.py.
`calculate` raises them, `evaluate` returns the code instead.
"""""

import logging
import math
import random
from decimal import Decimal, Context, ROUND_HALF_UP

from . import config_manager as config_manager
from . import ScientificEngine
from . import ExpressionSplitter
from . import PatternTable
from . import error as E


log = logging.getLogger(__name__)

CONSTANT_VALUES = {
    "PI": ScientificEngine.PI,
    "E": ScientificEngine.EULER,
}

# Passes allowed on top of the normalized input length before giving up
MIN_PASSES = 16


# -----------------------------
# Utilities / small helpers
# -----------------------------

def format_number(value):
    """Render a float as buffer text in positional notation (never '1e-05')."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return format(Decimal(repr(float(value))).normalize(), "f")


def to_number(text):
    return ExpressionSplitter.parse_number(text).value


def substitute(problem, match, value):
    """Replace the matched span by "(value)"; NaN ends the calculation."""
    if math.isnan(value):
        raise E.UndefinedError(f"Undefined result of '{match.group(0)}'", code="ERR:UNDEFINED")
    return problem[:match.start()] + "(" + format_number(value) + ")" + problem[match.end():]


def round_result(value, precision):
    """Round to `precision` significant digits; infinities pass through."""
    if not math.isfinite(value):
        return value
    rounded = Context(prec=precision, rounding=ROUND_HALF_UP).create_decimal_from_float(value)
    return float(rounded)


# -----------------------------
# Normalization
# -----------------------------

def normalize_e_type(problem):
    """Rewrite scientific notation: 2.5e-3 -> (2.5*10^-3)."""
    match = PatternTable.find_e_type(problem)
    while match:
        mantissa, exponent = match.groups()
        problem = problem[:match.start()] + f"({mantissa}*10^{exponent})" + problem[match.end():]
        match = PatternTable.find_e_type(problem)
    return problem


def normalize(problem, random_source):
    """Prepare raw input for the rewrite loop.

    The order is fixed, later steps rely on the earlier ones:
    constants -> RAND -> implicit multiplication -> scientific notation.
    """
    problem = PatternTable.WHITESPACE.sub("", problem)

    if PatternTable.brackets_error(problem):
        raise E.BracketsError(f"Unbalanced brackets in '{problem}'", code="ERR:BRACKETS")

    for name, pattern in PatternTable.CONSTANTS.items():
        problem = pattern.sub("(" + format_number(CONSTANT_VALUES[name]) + ")", problem)

    # Every RAND gets its own value
    problem = PatternTable.RANDOM.sub(lambda match: "(" + format_number(random_source()) + ")", problem)

    problem = PatternTable.MULTIPLYING_BEFORE_FUNCTION.sub("*", problem)
    problem = PatternTable.MULTIPLYING_BEFORE_NUMBER.sub("*", problem)

    return normalize_e_type(problem)


# -----------------------------
# Reduction steps (each one drains its own category)
# -----------------------------

def reduce_functions(problem, settings):
    match = PatternTable.find_function(problem)
    while match:
        name, argument = match.group(1), to_number(match.group(2))
        if settings["degrees"] and name in ScientificEngine.TRIGONOMETRIC:
            argument = math.radians(argument)

        value = ScientificEngine.FUNCTIONS[name](argument, settings["function_digits"])
        problem = substitute(problem, match, value)
        match = PatternTable.find_function(problem)
    return problem


def reduce_roots(problem):
    match = PatternTable.find_root(problem)
    while match:
        degree, radicand = to_number(match.group(1)), to_number(match.group(2))
        problem = substitute(problem, match, ScientificEngine.root(radicand, degree))
        match = PatternTable.find_root(problem)
    return problem


def reduce_bracket_factorials(problem):
    match = PatternTable.find_bracket_factorial(problem)
    while match:
        problem = substitute(problem, match, ScientificEngine.factorize(to_number(match.group(1))))
        match = PatternTable.find_bracket_factorial(problem)
    return problem


def reduce_bracket_powers(problem):
    match = PatternTable.find_bracket_power(problem)
    while match:
        base = to_number(match.group(1))
        exponent = ExpressionSplitter.evaluate(ExpressionSplitter.split_exponent(match.group(2)))
        if math.isnan(exponent):
            raise E.UndefinedError(f"Undefined exponent in '{match.group(0)}'", code="ERR:UNDEFINED")

        problem = substitute(problem, match, ScientificEngine.power(base, exponent))
        match = PatternTable.find_bracket_power(problem)
    return problem


def reduce_simple_expressions(problem):
    match = PatternTable.find_simple_expression(problem)
    while match:
        value = ExpressionSplitter.calculate_simple_expression(match.group(1))
        problem = substitute(problem, match, value)
        match = PatternTable.find_simple_expression(problem)
    return problem


def reduce_constants(problem):
    """Drop brackets around a lone number where they change nothing."""
    match = PatternTable.find_constant(problem)
    while match:
        number = match.group(1) if match.group(1) is not None else match.group(2)
        problem = problem[:match.start()] + number + problem[match.end():]
        match = PatternTable.find_constant(problem)
    return problem


def reduce_pass(problem, settings):
    """Run one full rewrite pass over the buffer."""
    problem = reduce_functions(problem, settings)
    problem = reduce_roots(problem)
    problem = reduce_bracket_factorials(problem)
    problem = reduce_bracket_powers(problem)
    problem = reduce_simple_expressions(problem)
    problem = reduce_constants(problem)
    problem = ExpressionSplitter.plus_minus_axiom(problem)
    return normalize_e_type(problem)


def reduce_problem(problem, settings):
    """Repeat rewrite passes until only a simple expression is left.

    A pass is deterministic, so a pass that changes nothing can never make
    progress later: that is reported as ERR:INFINITYLOOP. The pass count is
    also capped, proportional to the input length.
    """
    max_passes = 2 * len(problem) + MIN_PASSES

    for pass_number in range(1, max_passes + 1):
        if PatternTable.is_full_simple_expression(problem):
            return problem

        previous = problem
        problem = reduce_pass(problem, settings)
        log.debug("Pass %d: %s", pass_number, problem)

        if problem == previous:
            raise E.InfinityLoopError(f"Cannot reduce '{problem}'", code="ERR:INFINITYLOOP")

    if PatternTable.is_full_simple_expression(problem):
        return problem
    raise E.InfinityLoopError(f"No result after {max_passes} passes", code="ERR:INFINITYLOOP")


# -----------------------------
# Result formatting
# -----------------------------

def finalize(problem, settings):
    value = ExpressionSplitter.calculate_simple_expression(problem)
    if math.isnan(value):
        raise E.UndefinedError(f"Undefined result of '{problem}'", code="ERR:UNDEFINED")
    return round_result(value, settings["decimal_precision"])


# -----------------------------
# Public entry points
# -----------------------------

def calculate(problem, degrees=None, random_source=None):
    """Main API: normalize -> reduce -> finalize. Raises MathError on failure."""
    settings = config_manager.load_setting_value("all")
    if degrees is not None:
        settings["degrees"] = degrees
    if random_source is None:
        random_source = random.random

    try:
        buffer = normalize(problem, random_source)
        log.debug("Normalized: %s", buffer)
        buffer = reduce_problem(buffer, settings)
        return finalize(buffer, settings)

    # Re-raise our domain errors after attaching the source expression
    except E.MathError as e:
        e.equation = problem
        log.debug("%s: %s", e.code, e.message)
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except (ValueError, ArithmeticError) as e:
        raise E.MathError(message=str(e), code="ERR:ERROR", equation=problem) from e


def evaluate(problem, degrees=None, random_source=None):
    """Return the result of `problem` as a float, or its error code."""
    try:
        return calculate(problem, degrees=degrees, random_source=random_source)
    except E.MathError as e:
        return e.code
