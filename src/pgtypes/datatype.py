"""
PostgreSQL data type descriptors.

Each descriptor binds a type OID (see ``src/include/catalog/pg_type.dat`` in
the PostgreSQL sources) to its binary-format support and to the Python types
used for encoding parameters and decoding columns.

The set is closed. Array types are separate descriptors with their own OIDs,
never derived from the scalar ones. New wire types get a new descriptor;
existing OIDs are never renumbered.
"""
import datetime
import decimal
import numbers
import typing
import uuid
from dataclasses import dataclass
from typing import Any

import numpy as np
from psycopg.types.json import Json, Jsonb

from pgtypes.data import Box, Circle, Interval, Line, LineSegment, Path, Point
from pgtypes.data import Polygon

__all__ = [
    'DataType',
    'BUILTIN_TYPES',
    'BUILTIN_ASSOCIATIONS',
]


@dataclass(frozen=True)
class DataType:
    """Registry entry for one PostgreSQL wire type.

    ``encoding_type`` is the Python type sent as a parameter and
    ``decoding_type`` the Python type read back from a column. They only
    differ for numerics, where a sized tag such as ``numpy.int16`` is widened
    to a ``numbers`` ABC on decode.
    """
    name: str
    id: int
    supports_binary: bool
    encoding_type: Any
    decoding_type: Any = None

    def __post_init__(self):
        if self.decoding_type is None:
            object.__setattr__(self, 'decoding_type', self.encoding_type)

    @property
    def is_array(self) -> bool:
        return typing.get_origin(self.encoding_type) is list

    def __repr__(self) -> str:
        return f'<DataType {self.name} oid={self.id}>'


BOOL = DataType('BOOL', 16, True, bool)
BOOL_ARRAY = DataType('BOOL_ARRAY', 1000, True, list[bool])
INT2 = DataType('INT2', 21, True, np.int16, numbers.Integral)
INT2_ARRAY = DataType('INT2_ARRAY', 1005, True, list[np.int16], list[numbers.Integral])
INT4 = DataType('INT4', 23, True, np.int32, numbers.Integral)
INT4_ARRAY = DataType('INT4_ARRAY', 1007, True, list[np.int32], list[numbers.Integral])
INT8 = DataType('INT8', 20, True, int, numbers.Integral)
INT8_ARRAY = DataType('INT8_ARRAY', 1016, True, list[int], list[numbers.Integral])
FLOAT4 = DataType('FLOAT4', 700, True, np.float32, numbers.Real)
FLOAT4_ARRAY = DataType('FLOAT4_ARRAY', 1021, True, list[np.float32], list[numbers.Real])
FLOAT8 = DataType('FLOAT8', 701, True, float, numbers.Real)
FLOAT8_ARRAY = DataType('FLOAT8_ARRAY', 1022, True, list[float], list[numbers.Real])
NUMERIC = DataType('NUMERIC', 1700, False, decimal.Decimal, numbers.Number)
NUMERIC_ARRAY = DataType('NUMERIC_ARRAY', 1231, False, list[decimal.Decimal], list[numbers.Number])
MONEY = DataType('MONEY', 790, True, object)
MONEY_ARRAY = DataType('MONEY_ARRAY', 791, True, list[object])
BIT = DataType('BIT', 1560, True, object)
BIT_ARRAY = DataType('BIT_ARRAY', 1561, True, list[object])
VARBIT = DataType('VARBIT', 1562, True, object)
VARBIT_ARRAY = DataType('VARBIT_ARRAY', 1563, True, list[object])
CHAR = DataType('CHAR', 18, True, str)
CHAR_ARRAY = DataType('CHAR_ARRAY', 1002, True, list[str])
VARCHAR = DataType('VARCHAR', 1043, True, str)
VARCHAR_ARRAY = DataType('VARCHAR_ARRAY', 1015, True, list[str])
BPCHAR = DataType('BPCHAR', 1042, True, str)
BPCHAR_ARRAY = DataType('BPCHAR_ARRAY', 1014, True, list[str])
TEXT = DataType('TEXT', 25, True, str)
TEXT_ARRAY = DataType('TEXT_ARRAY', 1009, True, list[str])
NAME = DataType('NAME', 19, True, str)
NAME_ARRAY = DataType('NAME_ARRAY', 1003, True, list[str])
DATE = DataType('DATE', 1082, True, datetime.date)
DATE_ARRAY = DataType('DATE_ARRAY', 1182, True, list[datetime.date])
TIME = DataType('TIME', 1083, True, datetime.time)
TIME_ARRAY = DataType('TIME_ARRAY', 1183, True, list[datetime.time])
TIMETZ = DataType('TIMETZ', 1266, True, datetime.time)
TIMETZ_ARRAY = DataType('TIMETZ_ARRAY', 1270, True, list[datetime.time])
TIMESTAMP = DataType('TIMESTAMP', 1114, True, datetime.datetime)
TIMESTAMP_ARRAY = DataType('TIMESTAMP_ARRAY', 1115, True, list[datetime.datetime])
TIMESTAMPTZ = DataType('TIMESTAMPTZ', 1184, True, datetime.datetime)
TIMESTAMPTZ_ARRAY = DataType('TIMESTAMPTZ_ARRAY', 1185, True, list[datetime.datetime])
INTERVAL = DataType('INTERVAL', 1186, True, Interval)
INTERVAL_ARRAY = DataType('INTERVAL_ARRAY', 1187, True, list[Interval])
BYTEA = DataType('BYTEA', 17, True, bytes)
BYTEA_ARRAY = DataType('BYTEA_ARRAY', 1001, True, list[bytes])
MACADDR = DataType('MACADDR', 829, True, object)
INET = DataType('INET', 869, True, object)
CIDR = DataType('CIDR', 650, True, object)
MACADDR8 = DataType('MACADDR8', 774, True, object)
UUID = DataType('UUID', 2950, True, uuid.UUID)
UUID_ARRAY = DataType('UUID_ARRAY', 2951, True, list[uuid.UUID])
JSON = DataType('JSON', 114, True, object)
JSON_ARRAY = DataType('JSON_ARRAY', 199, True, list[object])
JSONB = DataType('JSONB', 3802, True, object)
JSONB_ARRAY = DataType('JSONB_ARRAY', 3807, True, list[object])
XML = DataType('XML', 142, True, object)
XML_ARRAY = DataType('XML_ARRAY', 143, True, list[object])
POINT = DataType('POINT', 600, True, Point)
POINT_ARRAY = DataType('POINT_ARRAY', 1017, True, list[Point])
LINE = DataType('LINE', 628, True, Line)
LINE_ARRAY = DataType('LINE_ARRAY', 629, True, list[Line])
LSEG = DataType('LSEG', 601, True, LineSegment)
LSEG_ARRAY = DataType('LSEG_ARRAY', 1018, True, list[LineSegment])
BOX = DataType('BOX', 603, True, Box)
BOX_ARRAY = DataType('BOX_ARRAY', 1020, True, list[Box])
PATH = DataType('PATH', 602, True, Path)
PATH_ARRAY = DataType('PATH_ARRAY', 1019, True, list[Path])
POLYGON = DataType('POLYGON', 604, True, Polygon)
POLYGON_ARRAY = DataType('POLYGON_ARRAY', 1027, True, list[Polygon])
CIRCLE = DataType('CIRCLE', 718, True, Circle)
CIRCLE_ARRAY = DataType('CIRCLE_ARRAY', 719, True, list[Circle])
HSTORE = DataType('HSTORE', 33670, True, object)
OID = DataType('OID', 26, True, object)
OID_ARRAY = DataType('OID_ARRAY', 1028, True, list[object])
VOID = DataType('VOID', 2278, True, object)
UNKNOWN = DataType('UNKNOWN', 705, False, str)
TS_VECTOR = DataType('TS_VECTOR', 3614, False, str)
TS_VECTOR_ARRAY = DataType('TS_VECTOR_ARRAY', 3643, False, list[str])
TS_QUERY = DataType('TS_QUERY', 3615, False, str)
TS_QUERY_ARRAY = DataType('TS_QUERY_ARRAY', 3645, False, list[str])

BUILTIN_TYPES: tuple[DataType, ...] = tuple(
    v for v in dict(globals()).values() if isinstance(v, DataType)
    )

# bytes is left out on purpose, it is matched by the binary-blob rule.
# CHAR, BPCHAR, TEXT, NAME, TIMETZ and TIMESTAMPTZ share a Python type with a
# more general descriptor and are never reverse targets.
BUILTIN_ASSOCIATIONS: tuple[tuple[Any, DataType], ...] = (
    (str, VARCHAR),
    (list[str], VARCHAR_ARRAY),
    (bool, BOOL),
    (list[bool], BOOL_ARRAY),
    (np.bool_, BOOL),
    (list[np.bool_], BOOL_ARRAY),
    (np.int16, INT2),
    (list[np.int16], INT2_ARRAY),
    (np.int32, INT4),
    (list[np.int32], INT4_ARRAY),
    (int, INT8),
    (list[int], INT8_ARRAY),
    (np.int64, INT8),
    (list[np.int64], INT8_ARRAY),
    (np.float32, FLOAT4),
    (list[np.float32], FLOAT4_ARRAY),
    (float, FLOAT8),
    (list[float], FLOAT8_ARRAY),
    (np.float64, FLOAT8),
    (list[np.float64], FLOAT8_ARRAY),
    (decimal.Decimal, NUMERIC),
    (list[decimal.Decimal], NUMERIC_ARRAY),
    (datetime.date, DATE),
    (list[datetime.date], DATE_ARRAY),
    (datetime.time, TIME),
    (list[datetime.time], TIME_ARRAY),
    (datetime.datetime, TIMESTAMP),
    (list[datetime.datetime], TIMESTAMP_ARRAY),
    (np.datetime64, TIMESTAMP),
    (list[np.datetime64], TIMESTAMP_ARRAY),
    (Interval, INTERVAL),
    (list[Interval], INTERVAL_ARRAY),
    (datetime.timedelta, INTERVAL),
    (list[datetime.timedelta], INTERVAL_ARRAY),
    (list[bytes], BYTEA_ARRAY),
    (uuid.UUID, UUID),
    (list[uuid.UUID], UUID_ARRAY),
    (dict, JSON),
    (list[dict], JSON_ARRAY),
    (Json, JSON),
    (list[Json], JSON_ARRAY),
    (Jsonb, JSONB),
    (list[Jsonb], JSONB_ARRAY),
    (Point, POINT),
    (list[Point], POINT_ARRAY),
    (Line, LINE),
    (list[Line], LINE_ARRAY),
    (LineSegment, LSEG),
    (list[LineSegment], LSEG_ARRAY),
    (Box, BOX),
    (list[Box], BOX_ARRAY),
    (Path, PATH),
    (list[Path], PATH_ARRAY),
    (Polygon, POLYGON),
    (list[Polygon], POLYGON_ARRAY),
    (Circle, CIRCLE),
    (list[Circle], CIRCLE_ARRAY),
    )
