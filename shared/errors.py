"""Error taxonomy shared by the analysis, generation and session layers."""


class VisualNovelError(Exception):
    """Base class for all visual novel errors."""


class AnalysisError(VisualNovelError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Script analysis failed.\n  Cause: {detail}")
        self.detail = detail


class RenderError(VisualNovelError):
    def __init__(self, subject: str, detail: str) -> None:
        super().__init__(f"Failed to render {subject}.\n  Cause: {detail}")
        self.subject = subject
        self.detail = detail


class SessionError(VisualNovelError):
    """
    Raised to the user when a session step fails.

    The message is generic; the underlying error is chained as
    ``__cause__`` and is only written to the logs.
    """

    USER_MESSAGE = "Failed to process script. Please check your API Key and try again."

    def __init__(self, message: str = USER_MESSAGE) -> None:
        super().__init__(message)
