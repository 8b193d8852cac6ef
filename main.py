# Main.py
""""" Console entry point for the calculator core.

   Responsibilities:
   - Verify the required package files exist
   - Configure logging from the configuration
   - Evaluate expressions given as arguments or read line by line from stdin
   - Compute the standard deviation of numbers read from stdin (--stddev)
   - Optionally copy the last result to the clipboard

"""""
import argparse
import logging
import sys
from pathlib import Path

import pyperclip

from CalculatorCore import config_manager as config_manager, MathEngine as MathEngine, Statistics as Statistics
from CalculatorCore import error as E


PROJECT_ROOT = Path(__file__).resolve().parent

log = logging.getLogger("calculator")


def check_files_exist():

    """
      Fail fast if package files are missing / moved / renamed, instead of a
      vague ImportError or a silent fallback to default settings.
    """

    package_dir = PROJECT_ROOT / "CalculatorCore"

    REQUIRED = [
        package_dir / "MathEngine.py",
        package_dir / "ScientificEngine.py",
        package_dir / "ExpressionSplitter.py",
        package_dir / "PatternTable.py",
        package_dir / "config_manager.py",
        package_dir / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:", file=sys.stderr)
        for file_name in missing_files:
            print(f"- {file_name}", file=sys.stderr)
        sys.exit(1)


def render(result):
    """Text shown for a result: "= 42" or "Error ERR:...: message"."""
    if isinstance(result, str):
        return f"Error {result}: {E.ERROR_MESSAGES.get(result, 'Unknown error')}"
    return "= " + MathEngine.format_number(result)


def build_parser():
    parser = argparse.ArgumentParser(prog="calculator", description="Evaluate arithmetic expressions.")
    parser.add_argument("expressions", nargs="*",
                        help="expressions to evaluate; read from stdin (one per line) when omitted")
    parser.add_argument("--degrees", action="store_true", help="trigonometric arguments are in degrees")
    parser.add_argument("--stddev", action="store_true",
                        help="print the standard deviation of the numbers read from stdin")
    parser.add_argument("--copy", action="store_true", help="copy the last result to the clipboard")
    parser.add_argument("--debug", action="store_true", help="log every reduction step")
    return parser


def copy_to_clipboard(text):
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        log.warning("Could not copy the result to the clipboard: %s", e)


def run_stddev(lines):
    try:
        result = Statistics.standard_deviation(Statistics.read_numbers(lines))
    except E.MathError as e:
        print(render(e.code), file=sys.stderr)
        return 1
    print(result)
    return 0


def main(argv=None):

    """
    Parse arguments, then evaluate.
    - Keep this thin: no calculation logic here.
    """

    args = build_parser().parse_args(argv)
    settings = config_manager.load_setting_value("all")

    logging.basicConfig(
        level=logging.DEBUG if (args.debug or settings["debug"]) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    check_files_exist()

    if args.stddev:
        return run_stddev(sys.stdin)

    if args.expressions:
        expressions = args.expressions
    else:
        expressions = [line.strip() for line in sys.stdin if line.strip()]

    # None lets the configuration decide
    degrees = True if args.degrees else None

    exit_code = 0
    last_result = None
    for problem in expressions:
        result = MathEngine.evaluate(problem, degrees=degrees)
        print(render(result))
        if isinstance(result, str):
            exit_code = 1
        else:
            last_result = result

    if last_result is not None and (args.copy or settings["copy_result"]):
        copy_to_clipboard(MathEngine.format_number(last_result))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
