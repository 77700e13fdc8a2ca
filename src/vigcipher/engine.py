import io
from enum import Enum
from typing import Iterable, Protocol

import structlog

from vigcipher.config import (
    MAX_SIZE,
    CaseFold,
    CipherOptions,
    Mode,
    TransformResult,
    ValidatedConfig,
)
from vigcipher.errors import (
    AlphabetTooLong,
    ConfigError,
    ConfigurationError,
    ConflictingCaseFold,
    ConflictingMode,
    DuplicateAlphabetCharacter,
    EmptyAlphabet,
    EmptyKey,
    EngineStateError,
    InvalidInputCharacter,
    KeyCharacterNotInAlphabet,
    KeyTooLong,
    MissingMode,
)

log = structlog.get_logger()


class CharSink(Protocol):
    def write(self, s: str, /) -> object: ...


class EngineState(str, Enum):
    UNVALIDATED = "unvalidated"
    VALIDATED = "validated"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ABORTED = "aborted"

    def __str__(self):
        return self.value


def find_duplicate(alphabet: str) -> str | None:
    """Return the first character that appears twice in the alphabet, if any."""
    seen = set()
    for char in alphabet:
        if char in seen:
            return char
        seen.add(char)
    return None


def validate_configuration(options: CipherOptions) -> ValidatedConfig:
    """
    Fold, check and index the alphabet and key.
    Every violation is collected; a ConfigurationError carrying all of them is
    raised if there is at least one.
    """
    errors: list[ConfigError] = []

    case_fold = CaseFold.NONE
    if options.upper and options.lower:
        errors.append(ConflictingCaseFold())
    elif options.upper:
        case_fold = CaseFold.UPPER
    elif options.lower:
        case_fold = CaseFold.LOWER

    mode = None
    if not options.encrypt and not options.decrypt:
        errors.append(MissingMode())
    elif options.encrypt and options.decrypt:
        errors.append(ConflictingMode())
    else:
        mode = Mode.ENCRYPT if options.encrypt else Mode.DECRYPT

    alphabet = case_fold.apply(options.alphabet)
    key = case_fold.apply(options.key)

    if not alphabet:
        errors.append(EmptyAlphabet())
    elif len(alphabet) > MAX_SIZE:
        errors.append(AlphabetTooLong())

    if not key:
        errors.append(EmptyKey())
    elif len(key) > MAX_SIZE:
        errors.append(KeyTooLong())

    duplicate = find_duplicate(alphabet)
    if duplicate is not None:
        errors.append(DuplicateAlphabetCharacter(duplicate))

    # First match wins, so a duplicated alphabet still resolves deterministically.
    alphabet_index: dict[str, int] = {}
    for index, char in enumerate(alphabet):
        alphabet_index.setdefault(char, index)

    key_indices = []
    if alphabet:
        reported = set()
        for char in key:
            index = alphabet_index.get(char)
            if index is None:
                if char not in reported:
                    reported.add(char)
                    errors.append(KeyCharacterNotInAlphabet(char))
                continue
            key_indices.append(index)

    if errors:
        log.debug("configuration rejected", errors=[type(e).__name__ for e in errors])
        raise ConfigurationError(errors)

    config = ValidatedConfig(
        alphabet=alphabet,
        key=key,
        key_indices=tuple(key_indices),
        mode=mode,
        case_fold=case_fold,
        passthru=options.passthru,
    )
    log.debug(
        "validated",
        mode=str(mode),
        case_fold=str(case_fold),
        passthru=options.passthru,
        alphabet_size=config.alphabet_size,
        key_size=config.key_size,
    )
    return config


def shift_index(index: int, shift: int, size: int, mode: Mode) -> int:
    """Move an alphabet index by shift positions, wrapping into [0, size)."""
    if mode == Mode.ENCRYPT:
        return (index + shift) % size
    # Python's % already lands in [0, size) for negative operands.
    return (index - shift) % size


def transform_stream(config: ValidatedConfig, source: Iterable[str], sink: CharSink) -> TransformResult:
    """
    Encrypt or decrypt characters from source into sink, one at a time.

    Characters outside the alphabet are written unchanged when pass-through is
    enabled and do not advance the key. Otherwise the first such character
    raises InvalidInputCharacter; anything already written stays on the sink.
    """
    alphabet = config.alphabet
    alphabet_size = config.alphabet_size
    key_indices = config.key_indices
    key_size = config.key_size

    cursor = 0
    transformed = 0
    passed_through = 0

    for position, char in enumerate(source):
        char = config.case_fold.apply(char)
        index = config.alphabet_index.get(char)
        if index is None:
            if config.passthru:
                sink.write(char)
                passed_through += 1
                continue
            log.debug("invalid input character", char=char, position=position)
            raise InvalidInputCharacter(char, position)

        shift = key_indices[cursor] + 1
        sink.write(alphabet[shift_index(index, shift, alphabet_size, config.mode)])
        transformed += 1
        cursor = (cursor + 1) % key_size

    log.debug("transform complete", transformed=transformed, passed_through=passed_through)
    return TransformResult(transformed=transformed, passed_through=passed_through, cursor=cursor)


class CipherEngine:
    """Single-use engine: validate once, stream once."""

    def __init__(self, options: CipherOptions):
        self.options = options
        self.state = EngineState.UNVALIDATED
        self.config: ValidatedConfig | None = None

    def validate(self) -> ValidatedConfig:
        if self.state != EngineState.UNVALIDATED:
            raise EngineStateError(f"cannot validate an engine that is {self.state}")
        self.config = validate_configuration(self.options)
        self.state = EngineState.VALIDATED
        return self.config

    def run(self, source: Iterable[str], sink: CharSink) -> TransformResult:
        if self.state != EngineState.VALIDATED:
            raise EngineStateError(f"cannot run an engine that is {self.state}")
        self.state = EngineState.STREAMING
        try:
            result = transform_stream(self.config, source, sink)
        except BaseException:
            self.state = EngineState.ABORTED
            raise
        self.state = EngineState.COMPLETED
        return result


def _transform_text(text: str, alphabet: str, key: str, *, encrypt: bool, **flags) -> str:
    options = CipherOptions(alphabet=alphabet, key=key, encrypt=encrypt, decrypt=not encrypt, **flags)
    engine = CipherEngine(options)
    engine.validate()
    out = io.StringIO()
    engine.run(text, out)
    return out.getvalue()


def encrypt_text(text: str, alphabet: str, key: str, **flags) -> str:
    """Encrypt an in-memory string. Accepts the upper, lower and passthru flags."""
    return _transform_text(text, alphabet, key, encrypt=True, **flags)


def decrypt_text(text: str, alphabet: str, key: str, **flags) -> str:
    """Decrypt an in-memory string. Accepts the upper, lower and passthru flags."""
    return _transform_text(text, alphabet, key, encrypt=False, **flags)
