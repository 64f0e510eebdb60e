"""
Tests for the builtin data type descriptors.
"""
import dataclasses
import numbers
from collections import Counter

import numpy as np
import pytest
from pgtypes import datatype as dt
from pgtypes.datatype import BUILTIN_ASSOCIATIONS, BUILTIN_TYPES, DataType
from psycopg import postgres


def test_oids_are_unique():
    counts = Counter(datatype.id for datatype in BUILTIN_TYPES)
    assert [oid for oid, n in counts.items() if n > 1] == []


def test_names_are_unique():
    counts = Counter(datatype.name for datatype in BUILTIN_TYPES)
    assert [name for name, n in counts.items() if n > 1] == []


def test_association_keys_are_unique():
    counts = Counter(type_ for type_, _ in BUILTIN_ASSOCIATIONS)
    assert [type_ for type_, n in counts.items() if n > 1] == []


def test_all_module_descriptors_are_registered():
    declared = [v for v in vars(dt).values() if isinstance(v, DataType)]
    assert set(declared) == set(BUILTIN_TYPES)
    assert len(BUILTIN_TYPES) == 79


def test_descriptors_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        dt.INT4.id = 24


def test_decoding_type_defaults_to_encoding_type():
    assert dt.TEXT.decoding_type is str
    assert DataType('X', 1, False, bytes).decoding_type is bytes


def test_numeric_types_widen_on_decode():
    assert dt.INT2.encoding_type is np.int16
    assert dt.INT2.decoding_type is numbers.Integral
    assert dt.INT4.encoding_type is np.int32
    assert dt.INT8.encoding_type is int
    assert dt.FLOAT4.encoding_type is np.float32
    assert dt.FLOAT4.decoding_type is numbers.Real
    assert dt.NUMERIC.decoding_type is numbers.Number
    assert dt.INT2_ARRAY.decoding_type == list[numbers.Integral]


def test_text_only_types():
    text_only = {datatype.name for datatype in BUILTIN_TYPES if not datatype.supports_binary}
    assert text_only == {
        'NUMERIC', 'NUMERIC_ARRAY', 'UNKNOWN',
        'TS_VECTOR', 'TS_VECTOR_ARRAY', 'TS_QUERY', 'TS_QUERY_ARRAY',
    }


def test_arrays_are_explicit():
    assert dt.INT4.id == 23
    assert dt.INT4_ARRAY.id == 1007
    assert dt.INT4_ARRAY.is_array
    assert not dt.INT4.is_array
    for datatype in BUILTIN_TYPES:
        assert datatype.is_array == datatype.name.endswith('_ARRAY')


def test_array_types_wrap_scalar_types():
    by_name = {datatype.name: datatype for datatype in BUILTIN_TYPES}
    for datatype in BUILTIN_TYPES:
        if datatype.is_array:
            scalar = by_name[datatype.name.removesuffix('_ARRAY')]
            assert datatype.encoding_type == list[scalar.encoding_type]
            assert datatype.decoding_type == list[scalar.decoding_type]
            assert datatype.supports_binary == scalar.supports_binary


@pytest.mark.parametrize(('datatype', 'pg_name'), [
    (dt.BOOL, 'bool'),
    (dt.INT2, 'int2'),
    (dt.INT4, 'int4'),
    (dt.INT8, 'int8'),
    (dt.FLOAT4, 'float4'),
    (dt.FLOAT8, 'float8'),
    (dt.NUMERIC, 'numeric'),
    (dt.TEXT, 'text'),
    (dt.VARCHAR, 'varchar'),
    (dt.BPCHAR, 'bpchar'),
    (dt.NAME, 'name'),
    (dt.DATE, 'date'),
    (dt.TIME, 'time'),
    (dt.TIMETZ, 'timetz'),
    (dt.TIMESTAMP, 'timestamp'),
    (dt.TIMESTAMPTZ, 'timestamptz'),
    (dt.INTERVAL, 'interval'),
    (dt.BYTEA, 'bytea'),
    (dt.UUID, 'uuid'),
    (dt.JSON, 'json'),
    (dt.JSONB, 'jsonb'),
    (dt.XML, 'xml'),
    (dt.POINT, 'point'),
    (dt.OID, 'oid'),
    (dt.INET, 'inet'),
    (dt.CIDR, 'cidr'),
    ])
def test_oids_match_postgres_catalog(datatype, pg_name):
    info = postgres.types.get(pg_name)
    assert info is not None
    assert datatype.id == info.oid
    by_name = {d.name: d for d in BUILTIN_TYPES}
    array = by_name.get(f'{datatype.name}_ARRAY')
    if array is not None:
        assert array.id == info.array_oid


def test_repr():
    assert repr(dt.INT4) == '<DataType INT4 oid=23>'
