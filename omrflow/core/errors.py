"""Custom exceptions used across omrflow."""


class OmrFlowError(Exception):
    """Base error for the application."""


class ConfigError(OmrFlowError):
    """Configuration related error."""


class ConversionError(OmrFlowError):
    """Raised when an LMS report cannot be converted into the OMR format.

    ``user_message`` is the single line shown to the person who triggered the
    conversion; the conversion can always be retried with corrected input.
    """

    default_message = "An error occurred during processing."

    def __init__(self, message: str | None = None) -> None:
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class MissingRequiredFile(ConversionError):
    """The mandatory Scores Report was not supplied."""

    default_message = "Please upload the Scores Report file."


class UnsupportedFileType(ConversionError):
    """The supplied file does not carry an accepted spreadsheet extension."""

    default_message = "Only CSV, XLSX, or XLS files are allowed."


class EmptyOrMalformedInput(ConversionError):
    """A supplied sheet is unreadable or holds no data rows."""

    default_message = "Scores Report is empty or missing data."


class SerializationFailure(ConversionError):
    """The output workbook could not be built or written."""

    default_message = "Could not create the OMR upload workbook."
