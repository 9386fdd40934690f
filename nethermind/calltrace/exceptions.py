class CallTraceError(Exception):
    """

    Base class for errors raised while resolving tracer output

    """


class InvalidInput(CallTraceError):
    """
    Raised when the resolver is invoked without trace text.  The following conditions will result in this
    error being raised:

        * ``None`` is passed instead of the tracer output
        * The tracer output is not a ``str`` (ie, undecoded ``bytes`` from a subprocess pipe)

    Empty text is not an error, and produces an empty ResolutionResult
    """
