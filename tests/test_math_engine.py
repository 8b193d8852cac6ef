"""
Tests for the rewrite loop and the public entry points.
"""

import json
import math
import random

import pytest

from CalculatorCore import MathEngine as M
from CalculatorCore import config_manager
from CalculatorCore import error as E


@pytest.mark.parametrize(
    "problem, expected",
    [
        ("6+3*2", 12),
        ("(6+3)*2", 18),
        ("6+3*(2+1)", 15),
        ("((((2))))", 2),
        ("8-3-2", 3),
        ("8/4*2", 4),
        ("2 + 3 * 4", 14),
    ],
)
def test_arithmetic(problem, expected):
    assert M.evaluate(problem) == expected


def test_composite_expression():
    assert M.evaluate("7*4+log(8+13*sin(18.3-4/2)+22)/3!-ln(14+3!)") == pytest.approx(25.230416403, abs=1e-8)


def test_nested_functions():
    problem = "2+(-log(1.8))*(8+sin(9+1-log(3+4*ln(8-6)-4))+4!/2+0.5+(1)-tan(4*5-4)+7)-cos(8)"
    assert M.evaluate(problem) == pytest.approx(-4.9711, abs=1e-3)


def test_constants():
    assert M.evaluate("PI") == 3.141592654
    assert M.evaluate("E") == 2.718281828
    assert M.evaluate("2PI") == 6.283185307
    assert M.evaluate("ln(E)") == 1


@pytest.mark.parametrize(
    "problem, expected",
    [
        ("2(3)", 6),
        ("(2)(3)", 6),
        ("(2)3", 6),
        ("3!4", 24),
        ("2sin(0)", 0),
        ("3log(100)", 6),
    ],
)
def test_implicit_multiplication(problem, expected):
    assert M.evaluate(problem) == expected


def test_scientific_notation():
    assert M.evaluate("2.5e-3") == pytest.approx(0.0025)
    assert M.evaluate("1e3") == 1000
    assert M.evaluate("1e3+1") == 1001
    assert M.evaluate("2*1.5e2") == 300


def test_random_literal():
    assert M.evaluate("RAND", random_source=lambda: 0.25) == 0.25

    values = iter([0.25, 0.5])
    assert M.evaluate("RAND+RAND", random_source=lambda: next(values)) == 0.75


def test_random_literal_stays_in_unit_interval():
    random.seed(7)
    for _ in range(20):
        assert 0 <= M.evaluate("RAND") < 1


def test_degrees():
    assert M.evaluate("sin(30)", degrees=True) == 0.5
    assert M.evaluate("cos(60)", degrees=True) == 0.5
    assert M.evaluate("tan(90)", degrees=True) == "ERR:UNDEFINED"
    # Non-trigonometric functions ignore the angle unit
    assert M.evaluate("log(100)", degrees=True) == 2


def test_roots():
    assert M.evaluate("(3)root(27)") == 3
    assert M.evaluate("(3)root(-8)") == -2
    assert M.evaluate("(2)root(16)+1") == 5
    assert M.evaluate("(2)root(-4)") == "ERR:UNDEFINED"


def test_powers():
    assert M.evaluate("(-2)^2") == 4
    assert M.evaluate("-2^2") == -4
    assert M.evaluate("2^3^2") == 512
    assert M.evaluate("(2)^3^2") == 512
    assert M.evaluate("(-2)^3!") == 64
    assert M.evaluate("2^-2") == 0.25
    assert M.evaluate("(1+1)^(1+2)") == 8


def test_factorials():
    assert M.evaluate("5!") == 120
    assert M.evaluate("(2+1)!") == 6
    assert M.evaluate("(-3)!") == "ERR:UNDEFINED"
    assert M.evaluate("2.5!") == "ERR:UNDEFINED"


def test_signs():
    assert M.evaluate("3--2") == 5
    assert M.evaluate("-(2+3)") == -5
    assert M.evaluate("(-3)*2") == -6
    assert M.evaluate("2-(-3)") == 5
    assert M.evaluate("2*(-3)") == -6


def test_rounding():
    assert M.evaluate("1/3") == 0.3333333333
    assert M.evaluate("2/3") == 0.6666666667
    assert M.evaluate("0.1+0.2") == 0.3


def test_infinity():
    assert M.evaluate("1/0") == math.inf
    assert M.evaluate("-1/0") == -math.inf
    assert M.evaluate("1/0+1") == math.inf
    assert M.evaluate("ln(0)") == -math.inf
    assert M.evaluate("10^400") == math.inf
    assert M.evaluate("Infinity-Infinity") == "ERR:UNDEFINED"
    assert M.evaluate("1^(1/0)") == "ERR:UNDEFINED"
    assert M.evaluate("(-1)^(1/0)") == "ERR:UNDEFINED"
    assert M.evaluate("2^(1/0)") == math.inf


def test_tiny_function_results_are_kept():
    assert M.evaluate("sin(0.00000000000001)") == 1e-14
    assert M.evaluate("sin(1e-14)/1e-14") == 1
    assert M.evaluate("sinh(1e-14)*10^14") == 1
    assert M.evaluate("sin(PI)") == 0
    assert M.evaluate("cos(PI/2)") == 0


def test_whitespace():
    assert M.evaluate(" 2 +\t3 * 4 ") == 14
    assert M.evaluate("sin ( 0 )") == 0
    assert M.evaluate("2 3") == "ERR:INFINITYLOOP"
    assert M.evaluate("1. 5") == "ERR:INFINITYLOOP"


@pytest.mark.parametrize(
    "problem, code",
    [
        ("(1+2", "ERR:BRACKETS"),
        ("1+2)", "ERR:BRACKETS"),
        ("3+(14-sin(3)", "ERR:BRACKETS"),
        ("0/0", "ERR:UNDEFINED"),
        ("tan(PI/2)", "ERR:UNDEFINED"),
        ("cotan(0)", "ERR:UNDEFINED"),
        ("ln(-1)", "ERR:UNDEFINED"),
        ("abc", "ERR:INFINITYLOOP"),
        ("foo(3)", "ERR:INFINITYLOOP"),
        ("3+", "ERR:MISSINGOPERAND"),
        ("()", "ERR:MISSINGOPERAND"),
        ("2*(3+)", "ERR:MISSINGOPERAND"),
        ("2**3", "ERR:MISSINGOPERAND"),
    ],
)
def test_error_codes(problem, code):
    assert M.evaluate(problem) == code


def test_calculate_raises_with_the_source_expression():
    with pytest.raises(E.UndefinedError) as excinfo:
        M.calculate("1+0/0")
    assert excinfo.value.code == "ERR:UNDEFINED"
    assert excinfo.value.equation == "1+0/0"

    with pytest.raises(E.BracketsError):
        M.calculate("((")


@pytest.mark.parametrize("problem", ["1/3", "2^0.5", "1e-7", "10^20", "-7/3", "PI"])
def test_result_text_evaluates_to_itself(problem):
    result = M.evaluate(problem)
    assert M.evaluate(M.format_number(result)) == result


def test_format_number():
    assert M.format_number(3.0) == "3"
    assert M.format_number(2.5) == "2.5"
    assert M.format_number(1e-05) == "0.00001"
    assert M.format_number(1e20) == "100000000000000000000"
    assert M.format_number(-0.125) == "-0.125"
    assert M.format_number(math.inf) == "Infinity"
    assert M.format_number(-math.inf) == "-Infinity"
    assert M.format_number(math.nan) == "NaN"


def test_normalize():
    source = random.random
    assert M.normalize("2 + 3", source) == "2+3"
    assert M.normalize("2  3", source) == "2  3"
    assert M.normalize("2(3)", source) == "2*(3)"
    assert M.normalize("(2)3", source) == "(2)*3"
    assert M.normalize("3log(2)", source) == "3*log(2)"
    assert M.normalize("(1)(2)", source) == "(1)*(2)"
    assert M.normalize("3!4", source) == "3!*4"
    assert M.normalize("2.5e-3", source) == "(2.5*10^-3)"
    assert M.normalize("2PI", source) == "2*(3.141592653589793)"
    assert M.normalize("RAND", lambda: 0.5) == "(0.5)"


def test_normalize_rejects_unbalanced_brackets():
    with pytest.raises(E.BracketsError):
        M.normalize(")1(", random.random)


def test_unreducible_buffer_is_reported():
    with pytest.raises(E.InfinityLoopError):
        M.reduce_problem("2*x", config_manager.load_setting_value("all"))


def test_decimal_precision_from_config(tmp_path, monkeypatch):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"decimal_precision": 4}), encoding="utf-8")
    monkeypatch.setattr(config_manager, "config_json", config)

    assert M.evaluate("1/3") == 0.3333
    assert M.evaluate("2/3") == 0.6667


def test_degrees_from_config(tmp_path, monkeypatch):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"degrees": True}), encoding="utf-8")
    monkeypatch.setattr(config_manager, "config_json", config)

    assert M.evaluate("sin(90)") == 1
    assert M.evaluate("sin(90)", degrees=False) == pytest.approx(0.8939966636)
