"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class StickerError(Exception):
    """Base class for sticker normalization errors."""


# ============================================================================
#                   Reply shape errors
# ============================================================================


class UnexpectedResponseError(StickerError):
    """Raised when a dispatcher reply has a shape the operation does not accept."""

    def __init__(self, command: str, response: object) -> None:
        super().__init__(
            f"Unexpected reply to '{command}': {type(response).__name__} {response!r}."
        )
        self.command = command
        self.response = response


class MalformedStickerError(StickerError):
    """Raised when a sticker line is not of the form ``name=value``."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Sticker line {line!r} is not of the form 'name=value'.")
        self.line = line
