import secrets
import time

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value == 0:
        return ALPHABET[0]
    out: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        out.append(ALPHABET[rem])
    return "".join(reversed(out))


def new_id() -> str:
    """Return a short opaque identifier for boards and cards.

    Millisecond timestamp in base 36 followed by six random base-36 digits.
    Not guaranteed unique, but collisions need two ids in the same
    millisecond drawing the same random suffix.
    """
    stamp = to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(6))
    return stamp + suffix


def clean(value: object) -> str:
    """Strip a possibly-missing string input; non-strings become empty."""
    if not isinstance(value, str):
        return ""
    return value.strip()
