from .contact import Contact, MUTABLE_FIELDS

__all__ = ["Contact", "MUTABLE_FIELDS"]
