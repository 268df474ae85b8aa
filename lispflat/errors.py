class LispError(Exception):
    """ Base class for all LispFlat errors"""
    pass

class LispSyntaxError(LispError):
    """ Raised when source text cannot be read into an expression"""

class LispUnboundSymbol(LispError):
    """ Raised when a symbol is looked up or set before it is bound"""

class LispArityError(LispError):
    """ Raised when a form or procedure receives the wrong number of operands"""

class LispTypeError(LispError):
    """ Raised when a value of the wrong variant is passed to a primitive or special form"""
