from quizrace.errors import InvalidArgument
from quizrace.models import is_bigint


def int_field(data: dict, key: str) -> int:
    """Read an integer from a JSON body, rejecting bools, floats, strings and
    values outside the signed 64-bit range."""
    value = data.get(key)
    if value is None:
        raise InvalidArgument(f'{key} is required')
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f'{key} must be an integer')
    if not is_bigint(value):
        raise InvalidArgument(f'{key} is out of range')
    return value
