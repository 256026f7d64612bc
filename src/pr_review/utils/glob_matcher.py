"""Shell-style glob patterns compiled to anchored regular expressions."""

import re
from collections.abc import Callable
from re import Pattern


def glob_to_regex(pattern: str) -> Pattern[str]:
    """Compile a glob pattern into a regex anchored to the whole path.

    ``*`` matches within a single path segment, ``**`` crosses segments and
    ``?`` matches one non-separator character. Everything else is literal,
    so ``*.json`` matches ``config.json`` but not ``config.json.ts``.

    Args:
        pattern: Glob pattern such as ``*.md`` or ``docs/**``

    Returns:
        Compiled regular expression
    """
    parts = ["^"]
    index = 0

    while index < len(pattern):
        char = pattern[index]

        if char == "*":
            if pattern[index + 1 : index + 2] == "*":
                parts.append(".*")
                index += 2
            else:
                parts.append("[^/]*")
                index += 1
            continue

        if char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
        index += 1

    parts.append("$")
    return re.compile("".join(parts))


def create_glob_matcher(pattern: str) -> Callable[[str], bool]:
    """Return a predicate that tells whether a path matches ``pattern``."""
    regex = glob_to_regex(pattern)

    def matches(path: str) -> bool:
        return regex.match(path) is not None

    return matches
