"""
Registry-specific exception classes.

Lookups never raise. These errors signal corrupted type definitions and are
expected to stop the client from starting.
"""


class RegistryError(Exception):
    """Base class for all type registry errors.
    """


class DuplicateTypeError(RegistryError):
    """Two descriptors share an OID or a name.
    """


class DuplicateAssociationError(RegistryError):
    """A Python type is associated with more than one descriptor.
    """


class TypeConfigError(RegistryError):
    """Type extension configuration could not be read or is malformed.
    """
