import click
from rich.console import Console

from vigcipher.alphabets import get_alphabet
from vigcipher.config import CipherOptions
from vigcipher.engine import CipherEngine
from vigcipher.errors import (
    ConfigError,
    ConfigurationError,
    InvalidInputCharacter,
    UnexpectedArguments,
    UnknownPredefinedAlphabet,
)
from vigcipher.logs import configure_logging
from vigcipher.streams import ByteSink, byte_chars, read_chars
from vigcipher.version import VERSION

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "allow_extra_args": True,
}

HELP_HINT = "Please run with --help for usage options."

console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def report(message: str) -> None:
    """Print a one-line diagnostic on stderr."""
    console.print(message, style="red", markup=False)


def report_config_errors(errors: list[ConfigError]) -> None:
    for error in errors:
        report(error.message)
    if any(isinstance(e, (UnknownPredefinedAlphabet, UnexpectedArguments)) for e in errors):
        report(HELP_HINT)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--alphabet", "-a",
    default="",
    envvar="VIGCIPHER_ALPHABET",
    metavar="<alphabet>",
    help="Unique ordered set of characters which can be encrypted.",
)
@click.option(
    "--predefined-alpha", "-q", "predefined",
    metavar="(UC|LC|AC|PRINT)",
    help="Use a predefined alphabet: UC = [A-Z], LC = [a-z], AC = [A-Za-z], PRINT = all printable characters.",
)
@click.option(
    "--key", "-k",
    default="",
    envvar="VIGCIPHER_KEY",
    metavar="<key>",
    help="Non-unique ordered set of alphabet characters that describes the substitution indices.",
)
@click.option("--encrypt", "-e", is_flag=True, help="Increment characters according to the key.")
@click.option("--decrypt", "-d", is_flag=True, help="Decrement characters according to the key.")
@click.option("--upper", "-u", is_flag=True, help="Convert everything to upper case if possible.")
@click.option(
    "--lower", "-l",
    is_flag=True,
    help="Convert everything to lower case if possible (may produce an error if this creates duplicate characters in the alphabet).",
)
@click.option(
    "--passthru", "-p",
    is_flag=True,
    help="Characters not in the alphabet are output unencrypted instead of producing an error.",
)
@click.option("--input", "-i", "input_file", type=click.File("rb"), default="-", help="Read from this file instead of STDIN.")
@click.option("--output", "-o", "output_file", type=click.File("wb"), default="-", help="Write to this file instead of STDOUT.")
@click.option("--verbose", is_flag=True, help="Log debug events to STDERR.")
@click.version_option(VERSION, "-v", "--version", message="%(version)s", help="Output version information and exit.")
@click.pass_context
def cli(
    ctx: click.Context,
    alphabet: str,
    predefined: str | None,
    key: str,
    encrypt: bool,
    decrypt: bool,
    upper: bool,
    lower: bool,
    passthru: bool,
    input_file,
    output_file,
    verbose: bool,
):
    """Applies an insecure Vigenere cipher on STDIN and outputs "encrypted" text on STDOUT.

    This cipher is completely insecure and should only be used for
    entertainment or educational purposes.
    """
    configure_logging(verbose)

    errors: list[ConfigError] = []
    if predefined is not None:
        try:
            alphabet = get_alphabet(predefined)
        except UnknownPredefinedAlphabet as e:
            errors.append(e)
    if ctx.args:
        errors.append(UnexpectedArguments(tuple(ctx.args)))

    options = CipherOptions(
        alphabet=byte_chars(alphabet),
        key=byte_chars(key),
        encrypt=encrypt,
        decrypt=decrypt,
        upper=upper,
        lower=lower,
        passthru=passthru,
    )
    engine = CipherEngine(options)
    try:
        engine.validate()
    except ConfigurationError as e:
        errors.extend(e.errors)

    if errors:
        report_config_errors(errors)
        ctx.exit(1)

    sink = ByteSink(output_file)
    try:
        engine.run(read_chars(input_file), sink)
    except InvalidInputCharacter as e:
        report(str(e))
        ctx.exit(1)
    finally:
        sink.flush()


if __name__ == "__main__":
    cli()
