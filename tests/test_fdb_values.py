import struct

from fdbstruct.databases.fdb import FieldData, RowHeader
from fdbstruct.databases.fdb.enum import ValueType
from fdbstruct.databases.fdb.reader import DatabaseReader
from fdbstruct.databases.fdb.values import resolve_value, resolve_row


def _field(type_tag, data_value):
    return FieldData(type_tag=type_tag, data_value=data_value)


def test_inline_values():
    """Values stored directly into the field don't need the reader."""
    assert resolve_value(None, _field(ValueType.NOTHING, 0)) is None
    assert resolve_value(None, _field(ValueType.INTEGER, 0xffffffff)) == -1
    assert resolve_value(None, _field(ValueType.INTEGER, 42)) == 42
    assert resolve_value(None, _field(ValueType.FLOAT, 0x3fc00000)) == 1.5
    assert resolve_value(None, _field(ValueType.BOOLEAN, 2)) is True
    assert resolve_value(None, _field(ValueType.BOOLEAN, 0)) is False
    assert resolve_value(None, _field(ValueType.UNKNOWN1, 5)) == 5
    assert resolve_value(None, _field(ValueType.UNKNOWN2, 6)) == 6


def test_float_matches_struct():
    raw = struct.pack('<f', -123.25)

    assert resolve_value(None, FieldData.decode(struct.pack('<I', 3) + raw)) == -123.25


def test_out_of_line_values(builder):
    text_addr = builder.append_string('Épée')
    big_addr = builder.append_raw(struct.pack('<q', -(2 ** 60)))

    reader = DatabaseReader(builder.finish([]))

    assert resolve_value(reader, _field(ValueType.TEXT, text_addr)) == 'Épée'
    assert resolve_value(reader, _field(ValueType.VARCHAR, text_addr)) == 'Épée'
    assert resolve_value(reader, _field(ValueType.BIGINT, big_addr)) == -(2 ** 60)


def test_resolve_rows(reader):
    tables = reader.get_table_header_list(reader.get_header())

    items = [resolve_row(reader, _) for _ in reader.iter_table_rows(tables[0])]

    assert items == [
        [2, 'Sword', 1.5],
        [4, 'Shield', 2.25],
        [1, 'Café', -0.5],
    ]

    flags = [resolve_row(reader, _) for _ in reader.iter_table_rows(tables[1])]

    assert flags == [
        [2 ** 40 + 7, True, 'hello', None],
        [-3, False, '', None],
    ]


def test_unknown_type_is_raw(builder):
    """A tag outside ValueType doesn't stop the row from being read."""
    fields_addr = builder.append_raw(struct.pack('<IIII', 9, 1234, 1, 7))
    row_addr = builder.append(RowHeader(field_count=2, field_data_list_addr=fields_addr))
    reader = DatabaseReader(builder.finish([]))

    assert resolve_row(reader, row_addr) == [1234, 7]
