

class MathError(Exception):
    def __init__(self, message, code="ERR:ERROR", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class BracketsError(MathError):
    pass

class UndefinedError(MathError):
    pass

class InfinityLoopError(MathError):
    pass

class MissingOperandError(MathError):
    pass




# Every code maps to one class of failure:
# ERR:BRACKETS       -> structural, detected before any reduction
# ERR:UNDEFINED      -> a computation produced an undefined value
# ERR:INFINITYLOOP   -> no reduction progress (unknown or malformed construct)
# ERR:MISSINGOPERAND -> a primitive got too few or non-numeric operands
# ERR:ERROR          -> anything unexpected


ERROR_MESSAGES = {
    "ERR:ERROR" : "Error.",
    "ERR:BRACKETS" : "Invalid bracketing.",
    "ERR:UNDEFINED" : "Undefined.",
    "ERR:MISSINGOPERAND" : "Missing operand.",
    "ERR:INFINITYLOOP" : "Unfortunately, this cannot be calculated.",
}
