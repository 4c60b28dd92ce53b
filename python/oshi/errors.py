class OshiError(Exception):
    """Base class for all oshi client errors."""

class InvalidURLError(OshiError, ValueError):
    """Error raised when an endpoint, admin or download URL cannot be used."""

class InvalidContentError(OshiError, TypeError):
    """Error raised when upload content is not bytes or a stream of bytes chunks."""

class TransportError(OshiError):
    """Error raised when a request could not be sent or its response could not be read."""

class ServiceError(OshiError):
    """Error raised when the service answers with a non-200 status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Status {status_code}: {message}")

class MalformedResponseError(OshiError):
    """Error raised when a 200 response body does not have the expected shape."""

    def __init__(self, body: str) -> None:
        self.body = body
        super().__init__(f"wrong response: {body}")

WrongResponseError = MalformedResponseError
