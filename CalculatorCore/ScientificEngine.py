# ScientificEngine.py
"""""
Numeric primitives used by the calculation engine.

Every function takes numbers (int/float, infinities allowed) and returns a float.
Mathematically undefined results come back as NaN, they are never raised.
Malformed input (too few operands, non-numbers, NaN operands) raises
MissingOperandError, so the caller can tell both situations apart.
"""""
import math
from decimal import Context, ROUND_HALF_UP

from . import error as E


PI = math.pi
EULER = math.e

# Significant digits kept by log / trigonometric / hyperbolic results
FUNCTION_DIGITS = 13

# Results closer than this to an integer are snapped onto it (roots only)
INTEGER_SNAP = 1e-12


def check_values(values, min_operands=0):
    """Raise MissingOperandError when values are too few or not plain numbers."""
    if len(values) < min_operands:
        raise E.MissingOperandError("Missing operands", code="ERR:MISSINGOPERAND")

    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            raise E.MissingOperandError(f"Wrong operand: {value!r}", code="ERR:MISSINGOPERAND")


def dampen(value, digits=FUNCTION_DIGITS):
    """Round away floating noise, keeping `digits` significant digits."""
    if not math.isfinite(value):
        return value
    return float(Context(prec=digits, rounding=ROUND_HALF_UP).create_decimal_from_float(value))


def snap_integer(value):
    if not math.isfinite(value):
        return value
    nearest = round(value)
    if nearest != 0 and abs(nearest - value) < INTEGER_SNAP:
        return float(nearest)
    return value


def is_odd_integer(value):
    return math.isfinite(value) and value == int(value) and int(value) % 2 == 1


# -----------------------------
# Basic arithmetic
# -----------------------------

def add(values):
    check_values(values, 1)
    result = 0.0
    for value in values:
        result += value
    return result


def subtract(values):
    check_values(values, 1)
    if len(values) == 1:
        return -float(values[0])

    result = float(values[0])
    for value in values[1:]:
        result -= value
    return result


def multiply(values):
    """Multiply left to right.

    A zero operand short-circuits to 0, except next to an infinity where
    the product is undefined.
    """
    check_values(values, 2)
    if 0 in values:
        if any(math.isinf(value) for value in values):
            return math.nan
        return 0.0

    result = 1.0
    for value in values:
        result *= value
    return result


def divide(values):
    """Divide left to right.

    0/x is 0, x/0 is an infinity signed like x * (sign of the zero),
    0/0 and inf/inf are NaN.
    """
    check_values(values, 2)
    if values[0] == 0 and 0 not in values[1:]:
        return 0.0

    result = float(values[0])
    for value in values[1:]:
        if value == 0:
            if result == 0 or math.isnan(result):
                return math.nan
            result = math.copysign(math.inf, result) * math.copysign(1.0, value)
        else:
            result = result / value
    return result


def factorize(number):
    check_values([number], 1)
    if number == math.inf:
        return math.inf
    if number < 0 or number != int(number):
        return math.nan

    result = 1.0
    for factor in range(2, int(number) + 1):
        result *= factor
        if math.isinf(result):
            break
    return result


# -----------------------------
# Powers and roots
# -----------------------------

def power(base, exponent):
    check_values([base, exponent], 2)
    # 1 ** inf has no limit
    if abs(base) == 1 and math.isinf(exponent):
        return math.nan
    try:
        return math.pow(base, exponent)
    except ValueError:
        # math.pow refuses 0 ** negative and negative ** fraction
        if base == 0:
            if is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan
    except OverflowError:
        if base < 0 and is_odd_integer(exponent):
            return -math.inf
        return math.inf


def root(radicand, degree):
    """Return the `degree`-th root of `radicand`; no complex results."""
    check_values([radicand, degree], 2)
    exponent = 1 / degree if degree != 0 else math.inf

    if radicand < 0:
        if is_odd_integer(abs(degree)):
            return -snap_integer(power(-radicand, exponent))
        return math.nan

    return snap_integer(power(radicand, exponent))


# -----------------------------
# Logarithms
# -----------------------------

def ln(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    if number == 0:
        return -math.inf
    if number < 0:
        return math.nan
    if number == math.inf:
        return math.inf
    return dampen(math.log(number), digits)


def log(number, digits=FUNCTION_DIGITS):
    """Decimal logarithm."""
    check_values([number], 1)
    if number == 0:
        return -math.inf
    if number < 0:
        return math.nan
    if number == math.inf:
        return math.inf
    return dampen(math.log10(number), digits)


# -----------------------------
# Trigonometry (radians)
# -----------------------------

def _is_multiple_of_pi(number, offset, digits):
    """True if number is offset + k*PI, to `digits` decimal places.

    For k = 0 only an exact hit counts, small arguments keep their value.
    """
    shifted = number - offset
    if shifted == 0:
        return True
    if round(shifted / PI) == 0:
        return False

    remainder = abs(math.fmod(shifted, PI))
    return round(remainder, digits) == 0 or round(remainder - PI, digits) == 0


def sin(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    if math.isinf(number):
        return math.nan
    if _is_multiple_of_pi(number, 0.0, digits):
        return 0.0
    return dampen(math.sin(number), digits)


def cos(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    if math.isinf(number):
        return math.nan
    if _is_multiple_of_pi(number, PI / 2, digits):
        return 0.0
    return dampen(math.cos(number), digits)


def tan(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    # Undefined at PI/2 + k*PI
    if math.isinf(number) or _is_multiple_of_pi(number, PI / 2, digits):
        return math.nan
    if _is_multiple_of_pi(number, 0.0, digits):
        return 0.0
    return dampen(math.tan(number), digits)


def cotan(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    # Undefined at k*PI
    if math.isinf(number) or _is_multiple_of_pi(number, 0.0, digits):
        return math.nan
    if _is_multiple_of_pi(number, PI / 2, digits):
        return 0.0
    return dampen(1 / math.tan(number), digits)


# -----------------------------
# Hyperbolic functions
# -----------------------------

def sinh(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    try:
        return dampen(math.sinh(number), digits)
    except OverflowError:
        return math.copysign(math.inf, number)


def cosh(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    try:
        return dampen(math.cosh(number), digits)
    except OverflowError:
        return math.inf


def tanh(number, digits=FUNCTION_DIGITS):
    check_values([number], 1)
    return dampen(math.tanh(number), digits)


# Name -> primitive, as they appear in an expression
FUNCTIONS = {
    "log": log,
    "ln": ln,
    "sin": sin,
    "cos": cos,
    "tan": tan,
    "cotan": cotan,
    "sinh": sinh,
    "cosh": cosh,
    "tanh": tanh,
}

TRIGONOMETRIC = ("sin", "cos", "tan", "cotan")
