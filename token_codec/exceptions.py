"""Exception hierarchy for the token codec.

Pure codec functions never raise on malformed data; they degrade to an
empty result. These exceptions signal programming errors (an unknown field
key) or host-side lookups that failed.
"""


class TokenCodecError(Exception):
    """Base class for token codec errors."""


class UnknownFieldError(TokenCodecError, ValueError):
    """A field key is not part of the token type's canonical form."""

    def __init__(self, token_type: str, field_key: str):
        super().__init__(f"Unknown field '{field_key}' for token type '{token_type}'")
        self.token_type = token_type
        self.field_key = field_key


class NotCompositeError(TokenCodecError, ValueError):
    """Sub-value editing was requested on a single-field token type."""

    def __init__(self, token_type: str):
        super().__init__(f"Token type '{token_type}' has no sub-values")
        self.token_type = token_type


class HostNotReadyError(TokenCodecError, RuntimeError):
    """The host has not computed a token's resolved value yet."""


class SetNotFoundError(TokenCodecError, KeyError):
    """No token set with the given id."""

    def __str__(self) -> str:
        return f"Set not found: {self.args[0]}"


class TokenNotFoundError(TokenCodecError, KeyError):
    """No token with the given id in the set."""

    def __str__(self) -> str:
        return f"Token not found: {self.args[0]}"
