class StorefrontError(Exception):
    """Base class for errors raised by the catalog services."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    status_code = 409


class PricingError(StorefrontError):
    status_code = 400
