# Statistics.py
"""""
Sample standard deviation, computed only through the calculator's own
numeric primitives (used for profiling the math library).

    s = sqrt( (sum(x^2) - n * mean^2) / (n - 1) )
"""""
import math

from . import ScientificEngine
from . import error as E


def read_numbers(lines):
    """Parse one number per line; blank lines are skipped."""
    numbers = []
    for line in lines:
        text = line.strip()
        if not text:
            continue
        try:
            number = float(text)
        except ValueError:
            raise E.MathError(f"Value '{text}' is not a valid number.", code="ERR:ERROR")
        if math.isnan(number):
            raise E.MathError(f"Value '{text}' is not a valid number.", code="ERR:ERROR")
        numbers.append(number)
    return numbers


def average(numbers):
    return ScientificEngine.multiply([ScientificEngine.divide([1, len(numbers)]), ScientificEngine.add(numbers)])


def standard_deviation(numbers):
    if len(numbers) < 2:
        raise E.MissingOperandError("At least two values are required.", code="ERR:MISSINGOPERAND")

    count = len(numbers)
    total = ScientificEngine.multiply([-count, ScientificEngine.power(average(numbers), 2)])
    for number in numbers:
        total = ScientificEngine.add([total, ScientificEngine.power(number, 2)])

    variance = ScientificEngine.multiply([ScientificEngine.divide([1, ScientificEngine.subtract([count, 1])]), total])
    # Rounding can push a zero variance slightly below 0
    if variance < 0:
        variance = 0.0
    return ScientificEngine.root(variance, 2)
