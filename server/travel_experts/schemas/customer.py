"""Customer registration schemas."""

from .common import ContactFields


class RegisterCustomerRequest(ContactFields):
    """Request schema for registering a customer."""
