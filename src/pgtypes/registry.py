"""
Bidirectional registry between PostgreSQL type OIDs and Python value types.

A wire-protocol codec consults the registry in two directions:

1. Decoding: a column arrives tagged with an OID, ``resolve_by_id`` tells
   which descriptor (and so which Python type) to produce.
2. Encoding: a parameter value is about to be sent, ``resolve_by_value_type``
   tells which OID to tag it with.

Both lookups are total. Anything the registry has not been taught about
resolves to the ``UNKNOWN`` descriptor so the codec can fall back to the
text format instead of failing the whole request.
"""
import datetime
import logging
import threading
import types
from collections.abc import Iterable, Iterator
from typing import Any

from psycopg import postgres

from pgtypes.config.type_extensions import TypeExtensionConfig
from pgtypes.datatype import BUILTIN_ASSOCIATIONS, BUILTIN_TYPES, BYTEA
from pgtypes.datatype import TIMESTAMPTZ, TIMETZ, UNKNOWN, DataType
from pgtypes.exceptions import DuplicateAssociationError, DuplicateTypeError
from pgtypes.exceptions import RegistryError
from pgtypes.options import RegistryOptions

logger = logging.getLogger(__name__)

__all__ = [
    'TypeRegistry',
    'resolve_by_id',
    'resolve_by_value_type',
    'resolve_by_value',
    'resolve_by_name',
]

BINARY_TYPES = (bytes, bytearray, memoryview)


def _is_binary(type_: Any) -> bool:
    """Check if ``type_`` is a class holding raw bytes.

    >>> _is_binary(bytearray)
    True
    >>> _is_binary(list[bytes])
    False
    """
    return isinstance(type_, type) and issubclass(type_, BINARY_TYPES)


class TypeRegistry:
    """Immutable OID and Python type indices over a closed descriptor set.

    All indices are built in the constructor and never change afterwards, so
    any number of threads may read concurrently. Inconsistent definitions
    raise from the constructor; a registry that exists is always valid.
    """

    _instance = None
    _lock = threading.RLock()

    def __init__(
        self,
        datatypes: Iterable[DataType] = BUILTIN_TYPES,
        associations: Iterable[tuple[Any, DataType]] = BUILTIN_ASSOCIATIONS,
        unknown: DataType = UNKNOWN,
    ) -> None:
        self._datatypes = tuple(datatypes)
        self._associations = tuple(associations)

        by_id: dict[int, DataType] = {}
        by_name: dict[str, DataType] = {}
        for datatype in self._datatypes:
            if datatype.id in by_id:
                raise DuplicateTypeError(
                    f'OID {datatype.id} defined by both {by_id[datatype.id].name} and {datatype.name}'
                    )
            if datatype.name in by_name:
                raise DuplicateTypeError(f'Type name {datatype.name} defined more than once')
            by_id[datatype.id] = datatype
            by_name[datatype.name] = datatype

        by_encoding_type: dict[Any, DataType] = {}
        for type_, datatype in self._associations:
            if by_id.get(datatype.id) is not datatype:
                raise RegistryError(f'{type_!r} is associated with unregistered type {datatype.name}')
            if type_ in by_encoding_type:
                raise DuplicateAssociationError(
                    f'{type_!r} associated with both {by_encoding_type[type_].name} and {datatype.name}'
                    )
            by_encoding_type[type_] = datatype

        if by_id.get(unknown.id) is not unknown:
            raise RegistryError(f'Fallback type {unknown.name} is not registered')

        arrays = {}
        for datatype in self._datatypes:
            array = by_name.get(f'{datatype.name}_ARRAY')
            if array is not None:
                arrays[datatype.id] = array

        self.unknown = unknown
        self.by_id = types.MappingProxyType(by_id)
        self.by_name = types.MappingProxyType(by_name)
        self.by_encoding_type = types.MappingProxyType(by_encoding_type)
        self._arrays = types.MappingProxyType(arrays)

    @classmethod
    def get_instance(cls) -> 'TypeRegistry':
        """Get the process-wide registry, building it on first use.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls.from_options(RegistryOptions())
        return cls._instance

    @classmethod
    def configure(cls, options: RegistryOptions) -> 'TypeRegistry':
        """Replace the process-wide registry with one built from ``options``.
        """
        with cls._lock:
            registry = cls.from_options(options)
            cls._instance = registry
        return registry

    @classmethod
    def from_options(cls, options: RegistryOptions) -> 'TypeRegistry':
        """Build the builtin registry plus any configured extension types.
        """
        if options.config_file:
            config = TypeExtensionConfig(options.config_file)
        elif options.search_default_locations:
            config = TypeExtensionConfig.get_instance()
        else:
            return cls()
        return cls().extend(config.datatypes, config.associations)

    def extend(
        self,
        datatypes: Iterable[DataType] = (),
        associations: Iterable[tuple[Any, DataType]] = (),
    ) -> 'TypeRegistry':
        """Return a new registry with extra descriptors and associations.

        The receiver is left untouched. Clashes with existing OIDs, names or
        associated types raise like they do at construction.
        """
        return type(self)(
            self._datatypes + tuple(datatypes),
            self._associations + tuple(associations),
            self.unknown,
            )

    def __iter__(self) -> Iterator[DataType]:
        return iter(self._datatypes)

    def __len__(self) -> int:
        return len(self._datatypes)

    def __contains__(self, oid: object) -> bool:
        return oid in self.by_id

    @property
    def associations(self) -> tuple[tuple[Any, DataType], ...]:
        return self._associations

    def resolve_by_id(self, oid: int) -> DataType:
        """Find the descriptor for a type OID received from the server.

        Unrecognized OIDs resolve to the unknown type.
        """
        datatype = self.by_id.get(oid)
        if datatype is None:
            logger.debug(f'Postgres type OID={oid} not handled - using unknown type instead')
            return self.unknown
        return datatype

    def resolve_by_value_type(self, type_: Any) -> DataType:
        """Find the descriptor used to send values of a Python type.

        Lookup order:
        1. The curated association for ``type_``
        2. ``BYTEA`` for any bytes-like class
        3. The unknown type
        """
        try:
            datatype = self.by_encoding_type.get(type_)
        except TypeError:
            datatype = None
        if datatype is not None:
            return datatype
        if _is_binary(type_):
            return self.by_id.get(BYTEA.id, self.unknown)
        logger.debug(f'Python type {type_!r} not handled - using unknown type instead')
        return self.unknown

    def resolve_by_value(self, value: Any) -> DataType:
        """Find the descriptor used to send a particular value.

        Refines ``resolve_by_value_type`` with what only the instance can
        tell: timezone awareness and the element type of a sequence. Only
        ``list`` and plain ``tuple`` values are arrays; tuple subclasses such
        as namedtuples are resolved by their own type. A list that contains
        itself resolves to the unknown type.
        """
        return self._resolve_value(value, frozenset())

    def _resolve_value(self, value: Any, parents: frozenset[int]) -> DataType:
        if value is None:
            return self.unknown
        if isinstance(value, datetime.datetime | datetime.time) and value.utcoffset() is not None:
            tz_type = TIMESTAMPTZ if isinstance(value, datetime.datetime) else TIMETZ
            return self.by_id.get(tz_type.id, self.unknown)
        if isinstance(value, list) or type(value) is tuple:
            if id(value) in parents:
                logger.debug('Cannot infer array type of self-referencing sequence - using unknown type instead')
                return self.unknown
            element = next((v for v in value if v is not None), None)
            if element is None:
                logger.debug('Cannot infer array type of empty sequence - using unknown type instead')
                return self.unknown
            element_type = self._resolve_value(element, parents | {id(value)})
            if element_type.is_array:
                return element_type
            array = self.array_of(element_type)
            if array is None:
                logger.debug(f'No array type for elements of {type(element)!r} - using unknown type instead')
                return self.unknown
            return array
        return self.resolve_by_value_type(type(value))

    def resolve_by_name(self, name: str) -> DataType:
        """Find the descriptor for a PostgreSQL type name.

        Accepts registry names (``int4``, ``ts_vector``), any name or alias
        known to psycopg's builtin catalog (``integer``, ``character
        varying``) and a trailing ``[]`` for the array type.
        """
        key = name.strip()
        is_array = key.endswith('[]')
        if is_array:
            key = key[:-2].strip()

        datatype = self.by_name.get(key.upper())
        if datatype is not None:
            if not is_array:
                return datatype
            array = self.array_of(datatype)
            if array is not None:
                return array

        info = postgres.types.get(key.lower())
        if info is None:
            logger.debug(f'Postgres type name {name!r} not handled - using unknown type instead')
            return self.unknown
        return self.resolve_by_id(info.array_oid if is_array else info.oid)

    def array_of(self, datatype: DataType) -> DataType | None:
        """Return the array descriptor paired with a scalar descriptor.
        """
        return self._arrays.get(datatype.id)


def resolve_by_id(oid: int) -> DataType:
    """Resolve a type OID with the process-wide registry.
    """
    return TypeRegistry.get_instance().resolve_by_id(oid)


def resolve_by_value_type(type_: Any) -> DataType:
    """Resolve a Python type with the process-wide registry.
    """
    return TypeRegistry.get_instance().resolve_by_value_type(type_)


def resolve_by_value(value: Any) -> DataType:
    """Resolve a Python value with the process-wide registry.
    """
    return TypeRegistry.get_instance().resolve_by_value(value)


def resolve_by_name(name: str) -> DataType:
    """Resolve a PostgreSQL type name with the process-wide registry.
    """
    return TypeRegistry.get_instance().resolve_by_name(name)
