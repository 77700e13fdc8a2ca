import string
from enum import Enum

from vigcipher.errors import UnknownPredefinedAlphabet

UC_ALPHA = string.ascii_uppercase
LC_ALPHA = string.ascii_lowercase
AC_ALPHA = string.ascii_uppercase + string.ascii_lowercase
# Space through tilde, in code point order.
PRINTABLE = "".join(chr(c) for c in range(0x20, 0x7F))


class PredefinedAlphabet(str, Enum):
    UC = "UC"
    LC = "LC"
    AC = "AC"
    PRINT = "PRINT"

    def __str__(self):
        return self.value

    @property
    def characters(self) -> str:
        match self:
            case PredefinedAlphabet.UC:
                return UC_ALPHA
            case PredefinedAlphabet.LC:
                return LC_ALPHA
            case PredefinedAlphabet.AC:
                return AC_ALPHA
            case PredefinedAlphabet.PRINT:
                return PRINTABLE


def get_alphabet(name: str) -> str:
    """Look up a predefined alphabet by its exact, case-sensitive name."""
    try:
        return PredefinedAlphabet(name).characters
    except ValueError:
        raise UnknownPredefinedAlphabet(name) from None
