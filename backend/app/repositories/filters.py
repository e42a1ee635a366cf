"""Helpers shared by repository search filters."""


def like_pattern(term: str) -> str:
    """Build a substring LIKE pattern with wildcard characters escaped (escape char ``\\``)."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
