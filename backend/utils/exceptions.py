"""Domain errors raised by the services and mapped to HTTP responses."""


class DomainError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class DuplicateEmail(DomainError):
    def __init__(self, message: str = "User already exists with this email"):
        super().__init__(message, 400)


class EmailTaken(DomainError):
    def __init__(self, message: str = "Email is already taken by another user"):
        super().__init__(message, 400)


class InvalidCredentials(DomainError):
    # Same message for unknown email and wrong password
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, 400)


class InsufficientStock(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class AuthenticationError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 401)


class MissingToken(AuthenticationError):
    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


class InvalidToken(AuthenticationError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class Forbidden(DomainError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, 403)


class NotFound(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class ProductNotFound(NotFound):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")
