class QueryError(Exception):
    """Base class for errors raised while building an entity query."""


class InvalidOperandError(QueryError):
    """
    Raised when a private setting name/value pair uses an unsupported
    comparison operand.

    @param operand: The rejected operand.
    """

    def __init__(self, operand):
        self.operand = operand

    def __str__(self):
        return 'Invalid operand %r.' % (self.operand,)


class InvalidOperatorError(QueryError):
    """
    Raised when private setting name/value pairs are combined with an
    operator other than C{AND} or C{OR}.
    """


class UnknownEntityTypeError(QueryError):
    """Raised when an entity query names an unknown L{EntityType}."""


class UnknownOptionError(QueryError):
    """Raised when an entity query is given options it doesn't understand.

    @param names: A sequence of the unknown option names.
    """

    def __init__(self, names):
        self.names = sorted(names)

    def __str__(self):
        return 'Unknown options: %s' % ', '.join(self.names)
