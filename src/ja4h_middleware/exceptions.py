"""Custom exceptions for the JA4H middleware.

The fingerprint core has almost no error states: absent headers, absent
cookies and malformed cookie segments all have defined fallbacks. The only
failure is a malformed request view, which is reported through
``InvalidInputError`` instead of producing a garbage fingerprint.

Examples:
    Handling an invalid request view::

        from ja4h_middleware.exceptions import InvalidInputError

        try:
            result = compute_fingerprint(view, options)
        except InvalidInputError as e:
            logger.warning("ja4h.invalid_request", field=e.field, error=str(e))
            result = None
"""


class JA4HError(Exception):
    """Base exception for all JA4H-related errors.

    Attributes:
        message: Human-readable error description.

    Examples:
        Catching all JA4H errors::

            try:
                result = middleware.fingerprint(request)
            except JA4HError as e:
                logger.error("ja4h.error", error=str(e))
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class InvalidInputError(JA4HError):
    """The request view handed to the fingerprint core is malformed.

    Raised when a required part of the view is missing or has the wrong
    type, for example a ``None`` method or a header value that is not a
    string. A malformed fingerprint is worse than no fingerprint for
    downstream consumers, so the core fails fast.

    Attributes:
        message: Human-readable error description.
        field: Name of the offending request view field.

    Examples:
        Raising an invalid input error::

            if not isinstance(view.method, str):
                raise InvalidInputError(
                    message="Request method must be a string",
                    field="method",
                )
    """

    def __init__(self, message: str, field: str) -> None:
        """Initialize the invalid input error with details.

        Args:
            message: Human-readable error description.
            field: Name of the offending request view field.
        """
        super().__init__(message)
        self.field = field
