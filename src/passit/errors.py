class PassitError(Exception):
    "Base class for all errors raised by passit."


class ShortReadError(PassitError, EOFError):
    "Exception raised when a reader runs out of bytes mid-read."

    def __init__(self, wanted: int, got: int):
        super().__init__(
            f"unexpected end of stream: wanted {wanted} bytes, got {got}"
        )
        self.wanted = wanted
        self.got = got


class InvalidTemplateError(PassitError, ValueError):
    "Exception raised when caller-provided data fails validation."


class RegexpCompileError(PassitError, ValueError):
    "Exception raised when a regular expression cannot be turned into a generator."


class WordListUnavailableError(PassitError, FileNotFoundError):
    "Exception raised when a bundled list's data file is not installed."
