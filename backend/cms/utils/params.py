import uuid


def parse_uuid_list(value: str | None) -> list[uuid.UUID]:
    """
    Parse a comma-separated list of UUIDs from a query parameter.

    Malformed tokens are dropped rather than rejected; duplicates keep their
    first position.
    """
    if not value or not value.strip():
        return []

    ids: list[uuid.UUID] = []
    for token in value.split(","):
        try:
            parsed = uuid.UUID(token.strip())
        except ValueError:
            continue
        if parsed not in ids:
            ids.append(parsed)
    return ids
