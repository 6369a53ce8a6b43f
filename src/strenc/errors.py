"""Custom exception hierarchy for strenc encoding errors."""

import regex as re


class StrEncError(Exception):
    """Base exception for all strenc errors."""


class TokenizationError(StrEncError):
    """Raised when a tokenizer cannot be constructed from its arguments."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize TokenizationError with pattern details.

        Args:
            message: Error message.
            pattern: The regex pattern that failed.
            regex_err: The underlying regex error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__(message + extra)
        self.pattern = pattern
        self.regex_err = regex_err


class DictionaryError(StrEncError):
    """Raised when dictionary lookups or mapping updates fail."""

    def __init__(
        self,
        message: str,
        *,
        token: str | None = None,
        token_id: int | None = None,
    ) -> None:
        """Initialize with optional token and id that get appended to the message."""
        extra = " "
        # reverse lookup: id not in dictionary
        if token_id is not None:
            extra += f"(token id: {token_id}) "
        # mapping update: offending token
        if token is not None:
            extra += f"(token: {token!r}) "
        super().__init__(message + extra)
        self.token = token
        self.token_id = token_id


class PolicyError(StrEncError):
    """Raised when an encoding policy cannot place values into its output."""

    def __init__(
        self,
        message: str,
        *,
        row: int | None = None,
        col: int | None = None,
        shape: tuple[int, ...] | None = None,
    ) -> None:
        extra = " "
        if row is not None and col is not None:
            extra += f"(index: ({row}, {col})) "
        if shape is not None:
            extra += f"(shape: {shape}) "
        super().__init__(message + extra)
        self.row = row
        self.col = col
        self.shape = shape


class ModelLoadError(StrEncError):
    """Raised when loading a persisted encoder fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        super().__init__(message + extra)
        self.model_path = model_path
        self.version_mismatch = version_mismatch


class StrategyError(StrEncError):
    """Raised when a tokenizer, policy or output kind name is unknown."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available
