"""
Configuration for site-specific PostgreSQL wire types.

Extension types (``citext``, ``hstore`` with a fixed OID, domain types, ...)
are declared in a JSON file::

    {
        "types": [
            {"name": "CITEXT", "oid": 16385, "binary": false,
             "encoding": "str", "array_oid": 16390}
        ],
        "associations": {
            "mypkg.types.CaseInsensitive": "CITEXT",
            "ipaddress.IPv4Address": "INET"
        }
    }

Python types are named by a builtin alias (see ``PYTHON_TYPE_NAMES``) or a
dotted import path, with a ``[]`` suffix for ``list[T]``.
"""
import datetime
import decimal
import importlib
import json
import logging
import pathlib
import threading
import uuid
from typing import Any

from pgtypes.datatype import BUILTIN_TYPES, DataType
from pgtypes.exceptions import TypeConfigError

logger = logging.getLogger(__name__)

PYTHON_TYPE_NAMES = {
    'str': str,
    'text': str,
    'int': int,
    'integer': int,
    'float': float,
    'bool': bool,
    'boolean': bool,
    'bytes': bytes,
    'decimal': decimal.Decimal,
    'date': datetime.date,
    'datetime': datetime.datetime,
    'time': datetime.time,
    'timedelta': datetime.timedelta,
    'uuid': uuid.UUID,
    'dict': dict,
    'object': object,
    }


def parse_python_type(spec: str) -> Any:
    """Turn a configured type name into a Python type.

    >>> parse_python_type('decimal')
    <class 'decimal.Decimal'>
    >>> parse_python_type('str[]')
    list[str]
    >>> parse_python_type('ipaddress.IPv4Address')
    <class 'ipaddress.IPv4Address'>
    """
    if not isinstance(spec, str):
        raise TypeConfigError(f'Python type must be given as a string: {spec!r}')
    spec = spec.strip()
    if spec.endswith('[]'):
        return list[parse_python_type(spec[:-2])]
    if spec.lower() in PYTHON_TYPE_NAMES:
        return PYTHON_TYPE_NAMES[spec.lower()]

    module_name, _, attr = spec.rpartition('.')
    if not module_name:
        raise TypeConfigError(f'Unknown Python type: {spec!r}')
    try:
        return getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise TypeConfigError(f'Cannot import Python type {spec!r}: {e}') from e


class TypeExtensionConfig:
    """Configuration for extra wire types"""

    _instance = None
    _lock = threading.RLock()

    default_locations = [
        pathlib.Path('~/.config/pgtypes/types.json').expanduser(),
        pathlib.Path('/etc/pgtypes/types.json'),
    ]

    @classmethod
    def get_instance(cls):
        """Get singleton instance"""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def __init__(self, config_file=None):
        self.datatypes: list[DataType] = []
        self.associations: list[tuple[Any, DataType]] = []

        if config_file:
            self.load_config(config_file)
        else:
            for location in self.default_locations:
                if pathlib.Path(location).exists():
                    self.load_config(location)
                    break

    def load_config(self, config_file):
        """Load extension types and associations from a JSON file"""
        try:
            with pathlib.Path(config_file).expanduser().open() as f:
                config = json.load(f)
        except (OSError, ValueError) as e:
            raise TypeConfigError(f'Failed to load type extension config {config_file}: {e}') from e
        if not isinstance(config, dict):
            raise TypeConfigError(f'Type extension config {config_file} must hold a JSON object')

        entries = config.get('types', [])
        if not isinstance(entries, list):
            raise TypeConfigError(f'"types" in {config_file} must be a JSON array')
        associations = config.get('associations', {})
        if not isinstance(associations, dict):
            raise TypeConfigError(f'"associations" in {config_file} must be a JSON object')

        known = {datatype.name: datatype for datatype in BUILTIN_TYPES}
        known.update({datatype.name: datatype for datatype in self.datatypes})

        for entry in entries:
            for datatype in self._parse_entry(entry):
                self.datatypes.append(datatype)
                known[datatype.name] = datatype

        for type_spec, target in associations.items():
            datatype = known.get(str(target).upper())
            if datatype is None:
                raise TypeConfigError(f'Association {type_spec!r} targets undeclared type {target!r}')
            self.associations.append((parse_python_type(type_spec), datatype))

        logger.info(f'Loaded type extension configuration from {config_file}')

    def _parse_entry(self, entry) -> list[DataType]:
        """Build the descriptor, and its array descriptor if declared"""
        if not isinstance(entry, dict):
            raise TypeConfigError(f'Type entry must be a JSON object: {entry!r}')
        try:
            name = entry['name'].upper()
            oid = int(entry['oid'])
            array_oid = int(entry['array_oid']) if entry.get('array_oid') is not None else None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TypeConfigError(f'Type entry needs a name and integer oids: {entry!r}') from e

        binary = bool(entry.get('binary', False))
        encoding = parse_python_type(entry.get('encoding', 'str'))
        decoding = parse_python_type(entry['decoding']) if 'decoding' in entry else encoding

        datatypes = [DataType(name, oid, binary, encoding, decoding)]
        if array_oid is not None:
            datatypes.append(DataType(f'{name}_ARRAY', array_oid, binary,
                                      list[encoding], list[decoding]))
        return datatypes
