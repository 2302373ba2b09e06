import io
import struct

import pytest

from fdbstruct.databases.fdb import (
    FDBHeader,
    TableHeader,
    TableDefHeader,
    ColumnHeader,
    TableDataHeader,
    BucketHeader,
    RowHeaderListEntry,
    RowHeader,
    FieldData,
)
from fdbstruct.databases.fdb.enum import ValueType, NULL_ADDR
from fdbstruct.databases.fdb.reader import DatabaseReader


class FDBBuilder(object):
    '''Lay out a FDB image in memory: records are appended at the end
    and their address is returned, the header is written by finish().'''

    def __init__(self):
        self.data = bytearray(FDBHeader.byte_width)

    def append(self, *chunks):
        addr = len(self.data)
        for chunk in chunks:
            self.data += chunk.raw

        return addr

    def append_raw(self, raw):
        addr = len(self.data)
        self.data += raw

        return addr

    def append_string(self, text):
        return self.append_raw(text.encode('cp1252') + b'\x00')

    def field(self, type_tag, value):
        if type_tag == ValueType.INTEGER:
            data_value = value & 0xffffffff
        elif type_tag == ValueType.FLOAT:
            data_value = struct.unpack('<I', struct.pack('<f', value))[0]
        elif type_tag == ValueType.BOOLEAN:
            data_value = int(value)
        elif type_tag in (ValueType.TEXT, ValueType.VARCHAR):
            data_value = self.append_string(value)
        elif type_tag == ValueType.BIGINT:
            data_value = self.append_raw(struct.pack('<q', value))
        else:
            data_value = value or 0

        return FieldData(type_tag=type_tag, data_value=data_value)

    def append_row(self, typed_values):
        fields = [self.field(_type, _value) for _type, _value in typed_values]
        fields_addr = self.append(*fields)

        return self.append(RowHeader(field_count=len(fields), field_data_list_addr=fields_addr))

    def append_chain(self, row_addrs):
        '''Return the address of the head of the list (NULL_ADDR if empty)'''
        next_addr = NULL_ADDR
        for row_addr in reversed(row_addrs):
            next_addr = self.append(RowHeaderListEntry(
                row_header_addr=row_addr,
                row_header_list_next_addr=next_addr,
            ))

        return next_addr

    def append_table(self, name, columns, buckets):
        '''"columns" is a list of (name, type), "buckets" a list of lists of rows.
        The TableHeader is returned, it's up to finish() to write it.'''
        name_addr = self.append_string(name)
        column_headers = [ColumnHeader(type_tag=_type, name_addr=self.append_string(_name)) for _name, _type in columns]
        columns_addr = self.append(*column_headers)
        def_addr = self.append(TableDefHeader(column_count=len(columns), column_header_list_addr=columns_addr))

        types = [_type for _, _type in columns]
        heads = []
        for rows in buckets:
            row_addrs = [self.append_row(list(zip(types, row))) for row in rows]
            heads.append(self.append_chain(row_addrs))

        buckets_addr = self.append(*[BucketHeader(row_header_list_head_addr=_) for _ in heads])
        data_addr = self.append(TableDataHeader(bucket_count=len(heads), bucket_header_list_addr=buckets_addr))

        return TableHeader(
            name_addr=name_addr,
            table_def_header_addr=def_addr,
            table_data_header_addr=data_addr,
        )

    def finish(self, tables):
        tables_addr = self.append(*tables)
        header = FDBHeader(table_count=len(tables), table_header_list_addr=tables_addr)
        self.data[0:FDBHeader.byte_width] = header.raw

        return bytes(self.data)


class SpyIO(io.BytesIO):
    '''BytesIO keeping track of the calls to seek() and read()'''

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.seeks = []
        self.reads = []

    def seek(self, *args, **kwargs):
        self.seeks.append(args[0])
        return super().seek(*args, **kwargs)

    def read(self, *args, **kwargs):
        data = super().read(*args, **kwargs)
        self.reads.append(len(data))
        return data


ITEMS_COLUMNS = [
    ('id', ValueType.INTEGER),
    ('name', ValueType.TEXT),
    ('price', ValueType.FLOAT),
]

ITEMS_BUCKETS = [
    [(2, 'Sword', 1.5), (4, 'Shield', 2.25)],
    [(1, 'Café', -0.5)],
    [],
]

FLAGS_COLUMNS = [
    ('key', ValueType.BIGINT),
    ('enabled', ValueType.BOOLEAN),
    ('note', ValueType.VARCHAR),
    ('extra', ValueType.NOTHING),
]

FLAGS_BUCKETS = [
    [(2 ** 40 + 7, True, 'hello', None), (-3, False, '', None)],
]


@pytest.fixture
def builder():
    return FDBBuilder()


@pytest.fixture
def sample_fdb(builder):
    tables = [
        builder.append_table('Items', ITEMS_COLUMNS, ITEMS_BUCKETS),
        builder.append_table('Flags', FLAGS_COLUMNS, FLAGS_BUCKETS),
    ]

    return builder.finish(tables)


@pytest.fixture
def reader(sample_fdb):
    return DatabaseReader(sample_fdb)
