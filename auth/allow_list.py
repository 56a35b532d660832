"""Static admin allow-list parsing."""


def parse_allow_list(raw: str | None) -> frozenset[str]:
    """
    Parse a comma-separated list of telegram user ids.

    Blank entries and surrounding whitespace are dropped, so
    " 42, ,99 " yields {"42", "99"}.
    """
    if not raw:
        return frozenset()
    return frozenset(item.strip() for item in raw.split(",") if item.strip())
