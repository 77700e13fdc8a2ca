from vigcipher.config import MAX_SIZE


def printable(text: str) -> str:
    """Escape control and other non-printable characters so a message stays on one line."""
    if text.isprintable():
        return text
    return text.encode("unicode_escape").decode("ascii")


class VigcipherError(Exception):
    pass


class ConfigError(VigcipherError):
    """A single configuration violation with a one-line, human-readable message."""

    message = "Invalid configuration."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmptyAlphabet(ConfigError):
    message = "No alphabet provided."


class EmptyKey(ConfigError):
    message = "No key provided."


class AlphabetTooLong(ConfigError):
    message = f"Alphabet is longer than max supported size of {MAX_SIZE}."


class KeyTooLong(ConfigError):
    message = f"Key is longer than max supported size of {MAX_SIZE}."


class DuplicateAlphabetCharacter(ConfigError):

    def __init__(self, char: str):
        self.char = char
        super().__init__("Alphabet cannot have duplicate characters.")


class KeyCharacterNotInAlphabet(ConfigError):

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Key has character '{printable(char)}' that is not in the alphabet.")


class ConflictingCaseFold(ConfigError):
    message = "You cannot convert output to both upper case and lower case."


class MissingMode(ConfigError):
    message = "Specify if you would like to encrypt or decrypt."


class ConflictingMode(ConfigError):
    message = "You cannot both encrypt and decrypt."


class UnknownPredefinedAlphabet(ConfigError):

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'There is no predefined alphabet "{printable(name)}".')


class UnexpectedArguments(ConfigError):

    def __init__(self, args: tuple[str, ...]):
        self.args_given = args
        super().__init__("Non-option arguments are not supported.")


class ConfigurationError(VigcipherError):
    """Every violation found while validating a configuration, in detection order."""

    def __init__(self, errors: list[ConfigError]):
        self.errors = list(errors)
        super().__init__("; ".join(e.message for e in self.errors))


class InvalidInputCharacter(VigcipherError):
    """Raised when strict mode meets a character outside the alphabet."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Input has character '{printable(char)}' that is not in the alphabet.")


class EngineStateError(RuntimeError):
    pass
