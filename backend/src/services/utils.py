"""Shared helpers for service-layer queries."""

LIKE_ESCAPE_CHAR = "\\"


def escape_ilike(value: str) -> str:
    r"""
    Escape LIKE wildcards so the value matches literally.

    Use together with `escape=LIKE_ESCAPE_CHAR`, e.g.
    `column.ilike(f"%{escape_ilike(q)}%", escape=LIKE_ESCAPE_CHAR)`.
    The escape character itself is escaped first.
    """
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )
