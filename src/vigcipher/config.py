import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict

MAX_SIZE = 256

# ASCII-only, like toupper/tolower in the C locale. str.upper() would map some
# latin-1 characters outside the byte range ('ÿ' -> 'Ÿ') or to two characters ('ß' -> 'SS').
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class Mode(str, Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

    def __str__(self):
        return self.value


class CaseFold(str, Enum):
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"

    def __str__(self):
        return self.value

    def apply(self, text: str) -> str:
        """Return a folded copy of the text."""
        match self:
            case CaseFold.UPPER:
                return text.translate(_TO_UPPER)
            case CaseFold.LOWER:
                return text.translate(_TO_LOWER)
            case _:
                return text


class CipherOptions(BaseModel):
    """Raw configuration as resolved from the command line, before validation."""

    model_config = ConfigDict(frozen=True)

    alphabet: str = ""
    key: str = ""
    encrypt: bool = False
    decrypt: bool = False
    upper: bool = False
    lower: bool = False
    passthru: bool = False


@dataclass(frozen=True, slots=True)
class ValidatedConfig:
    """Immutable, validated cipher configuration."""

    alphabet: str
    key: str
    key_indices: tuple[int, ...]
    mode: Mode
    case_fold: CaseFold = CaseFold.NONE
    passthru: bool = False

    alphabet_index: Mapping[str, int] = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        index = {}
        for position, char in enumerate(self.alphabet):
            index.setdefault(char, position)
        object.__setattr__(self, "alphabet_index", index)

    @property
    def alphabet_size(self) -> int:
        return len(self.alphabet)

    @property
    def key_size(self) -> int:
        return len(self.key)


@dataclass(frozen=True, slots=True)
class TransformResult:
    transformed: int
    passed_through: int
    cursor: int
