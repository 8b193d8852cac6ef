"""String-rewriting arithmetic expression evaluator."""
from .MathEngine import calculate, evaluate
