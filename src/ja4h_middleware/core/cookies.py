"""Cookie header parsing for the JA4H fingerprint."""

from ja4h_middleware.utils.headers import ascii_lower


def parse_cookies(cookie_header: str | None) -> tuple[str, str]:
    """Parse a Cookie header into sorted cookie names and name=value pairs.

    Segments are split on ';' and stripped of leading whitespace, then split
    on the first '='. Names are lower-cased (ASCII letters only); values
    are kept as sent. A segment without '=' yields an empty value. Segments
    with no name are skipped, including ones that start with '=': for
    "=abc" there is no name, rather than the name "abc". Both lists are
    sorted independently by code point.

    Args:
        cookie_header: Raw Cookie header value, or None if absent

    Returns:
        Tuple of (comma-joined names, comma-joined name=value pairs); both
        are empty strings when the header is absent

    Example:
        >>> parse_cookies("b=2; a=1; a=1")
        ('a,a,b', 'a=1,a=1,b=2')
        >>> parse_cookies("Session; theme=")
        ('session,theme', 'session=,theme=')
    """
    if cookie_header is None:
        return "", ""

    names: list[str] = []
    pairs: list[str] = []

    for segment in cookie_header.split(";"):
        name, _, value = segment.lstrip().partition("=")
        if not name:
            continue
        name_lower = ascii_lower(name)
        names.append(name_lower)
        pairs.append(f"{name_lower}={value}")

    return ",".join(sorted(names)), ",".join(sorted(pairs))
