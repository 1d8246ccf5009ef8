import random
import re
import string
from typing import Callable

ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 6
CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6}")


def random_id(n: int = ID_LENGTH) -> str:
    return "".join(random.choice(ALPHABET) for _ in range(n))


def generate_id(taken: Callable[[str], bool], n: int = ID_LENGTH) -> str:
    """Draw random ids until one is not `taken`.

    The caller must insert the returned id before releasing whatever lock
    guards `taken`, otherwise two callers can be handed the same id.
    """
    while True:
        candidate = random_id(n)
        if not taken(candidate):
            return candidate
