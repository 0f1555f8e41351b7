import enum

INT_BITS = 32
INT_MIN = -(2 ** (INT_BITS - 1))
INT_MAX = 2 ** (INT_BITS - 1) - 1


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def wrap_int(v: int) -> int:
    """Wraps an arbitrary Python int into the 32-bit two's complement range"""
    return (v - INT_MIN) % 2**INT_BITS + INT_MIN


def truncating_div(a: int, b: int) -> int:
    # Python's // floors, C-- truncates toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def truncating_mod(a: int, b: int) -> int:
    return a - b * truncating_div(a, b)
