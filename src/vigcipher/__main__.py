"""Main entry point for the vigcipher package."""
from vigcipher.cli import cli


def main():
    """Main entry point function."""
    cli(prog_name="vigcipher")


if __name__ == "__main__":
    main()
