"""Process exit codes of the ``gapispec`` command line.

Each :class:`~gapispec.exceptions.GapiError` subclass carries one of these
as its ``exit_code``, so scripts can tell a rejected token from a missing
resource without parsing stderr::

    $ gapispec call blogger getBlogs 0000
    Error: HTTP 404: Not Found
    $ echo $?
    4
"""

EXIT_SUCCESS = 0

EXIT_GENERIC_FAILURE = 1
"""Other 4xx responses, bad configuration, and unexpected crashes."""

EXIT_INVALID_USAGE = 2
"""Unknown service or method, or arguments that do not fit the method."""

EXIT_AUTH_FAILURE = 3
"""Consent declined, or Google rejected the bearer token (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""HTTP 404."""

EXIT_SERVER_ERROR = 5
"""HTTP 5xx."""

EXIT_CONNECTION_ERROR = 6
"""Timeout, DNS failure, refused connection, or another transport error."""

EXIT_SPEC_ERROR = 7
"""A resource spec is malformed or yields the same method name twice."""
