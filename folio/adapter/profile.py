"""Profile normalisation shared by the provider adapters."""

USERNAME_MAX_LENGTH = 255


def display_name(*candidates: object) -> str:
    """Return the first non-blank candidate, trimmed to fit a username.

    Providers send ``null``, empty or whitespace-only names; the caller
    passes fallbacks in order of preference, ending with one that is
    always present (the verified email).
    """
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()[:USERNAME_MAX_LENGTH]
    return ""
