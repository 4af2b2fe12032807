def normalize_level_name(value: str | None) -> str | None:
    """
    Upper-case a logging level name and drop surrounding whitespace.

    `" warning "` becomes `"WARNING"`; None passes through so pydantic can
    apply the field default.
    """
    if value is None:
        return None
    return value.strip().upper()

def normalize_format_name(value: str | None) -> str | None:
    """
    Lower-case an output format name ("JSON" -> "json").
    """
    if value is None:
        return None
    return value.strip().lower()
