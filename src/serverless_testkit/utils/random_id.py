"""Random identifiers for test data."""

import uuid

from ..exceptions import ValidationError

MAX_UUID_LENGTH = 36


def generate_random_id(length: int = MAX_UUID_LENGTH) -> str:
    """
    Generate a random uuid4-based identifier.

    Handy for test records that must not clash with other runs, e.g.
    ``f"USER#{generate_random_id()}"``.

    Args:
        length: Number of characters to keep (at most 36)

    Returns:
        The first ``length`` characters of a random uuid4 string

    Raises:
        ValidationError: If length is negative or above 36
    """
    if length > MAX_UUID_LENGTH:
        raise ValidationError("max uuid v4 length is 36", context={"length": length})
    if length < 0:
        raise ValidationError("length must not be negative", context={"length": length})
    return str(uuid.uuid4())[:length]
