"""
PostgreSQL wire type registry.

Maps type OIDs to the Python types a codec decodes columns into, and Python
types to the OIDs their values are sent as:

- Module functions: pgtypes.resolve_by_id(23)
- Registry methods: TypeRegistry.get_instance().resolve_by_id(23)

Neither direction ever raises for an unrecognized input; the ``UNKNOWN``
descriptor (text format only) is returned instead.
"""
__version__ = '0.1.0'

from pgtypes.data import Box, Circle, Interval, Line, LineSegment, Path, Point
from pgtypes.data import Polygon
from pgtypes.datatype import BUILTIN_ASSOCIATIONS, BUILTIN_TYPES, DataType
from pgtypes.exceptions import DuplicateAssociationError, DuplicateTypeError
from pgtypes.exceptions import RegistryError, TypeConfigError
from pgtypes.options import RegistryOptions
from pgtypes.registry import TypeRegistry, resolve_by_id, resolve_by_name
from pgtypes.registry import resolve_by_value, resolve_by_value_type

__all__ = [
    # Registry
    'TypeRegistry', 'RegistryOptions',
    'resolve_by_id', 'resolve_by_value_type', 'resolve_by_value', 'resolve_by_name',
    # Descriptors
    'DataType', 'BUILTIN_TYPES', 'BUILTIN_ASSOCIATIONS',
    # Values
    'Point', 'Line', 'LineSegment', 'Box', 'Path', 'Polygon', 'Circle', 'Interval',
    # Errors
    'RegistryError', 'DuplicateTypeError', 'DuplicateAssociationError', 'TypeConfigError',
]
