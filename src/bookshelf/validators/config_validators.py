def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def split_csv(value: str | None) -> list[str]:
    """
    Turn a comma separated env value ("http://a, http://b") into a list of stripped items.
    Empty items are dropped, so a trailing comma is harmless.
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
