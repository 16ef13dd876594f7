import re
from typing import Iterable


_DEFAULT_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # user:password@host in connection URLs
    (re.compile(r"(\w+://[^:/@\s]+):[^@\s]+@"), r"\1:[REDACTED]@"),
    # password=... / passwd=... / pwd=... pairs in driver kwargs or DSNs
    (re.compile(r"\b(password|passwd|pwd)(\s*[=:]\s*)(['\"]?)[^'\"\s,;)]+\3", re.IGNORECASE),
     r"\1\2\3[REDACTED]\3"),
]


def redact_text(text: str, extra_patterns: Iterable[tuple[re.Pattern[str], str]] | None = None) -> str:
    """
    Mask credentials in log lines and driver error messages.
    Every message that may carry connection details goes through here.
    """
    patterns = list(_DEFAULT_PATTERNS)
    if extra_patterns:
        patterns.extend(list(extra_patterns))

    redacted = text
    for pattern, repl in patterns:
        redacted = pattern.sub(repl, redacted)
    return redacted
