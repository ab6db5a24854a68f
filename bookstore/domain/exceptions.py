# bookstore/domain/exceptions.py
"""
Bledy domenowe. Dziedzicza po wbudowanych wyjatkach, zeby routery
mogly je lapac tak samo jak ValueError / PermissionError.
"""


class EntityNotFoundError(LookupError):
    pass


class FieldMismatchError(ValueError):
    pass


class RegistrationError(ValueError):
    pass


class EmptyCartError(ValueError):
    pass


class AuthenticationError(Exception):
    pass


class AccessDeniedError(PermissionError):
    pass


class ConcurrentModificationError(RuntimeError):
    pass


class CheckoutInProgressError(RuntimeError):
    pass
