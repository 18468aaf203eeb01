"""Exceptions shared by services and mapped to HTTP responses by routers."""


class ExternalServiceError(Exception):
    """
    A call to the auth provider, object storage or Resend failed.

    status_code is what the API answers with: the provider's 4xx becomes
    400 so the client can show the provider message; anything else is 502.
    """

    def __init__(self, message: str, status_code: int = 502, service: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.service = service
