'''
# FDB format

Database format used to ship the reference tables of a client/server
application; there is no official documentation, the layout below is
reverse engineered.

The file is self-indexing: starting from the header at offset zero

    FDBHeader
     `- TableHeader[table_count]
         |- TableDefHeader -> ColumnHeader[column_count]
         `- TableDataHeader -> BucketHeader[bucket_count]
                                `- RowHeaderListEntry -> RowHeaderListEntry -> ...
                                    `- RowHeader -> FieldData[field_count]

every "*_addr" field is an absolute offset into the file, 0xffffffff meaning
"nothing". Text is stored elsewhere in the file as zero terminated Windows-1252
strings. All the integers are little endian.
'''
from ...core import Chunk
from ...enum import Compliant
from ... import fields
from .enum import ValueType


class Address(fields.StructField):
    '''Absolute offset into the file'''

    def __init__(self, **kwargs):
        super().__init__('I', **kwargs)


class Count(fields.StructField):

    def __init__(self, **kwargs):
        super().__init__('I', **kwargs)


class ValueTypeField(fields.StructField):
    '''Type tag of a column or of a field.

    Tags outside ValueType are kept as plain ints with a warning; pass
    compliant=Compliant.ENUM to reject them.'''

    def __init__(self, **kwargs):
        kwargs.setdefault('compliant', Compliant.NONE)
        super().__init__('I', enum=ValueType, default=ValueType.NOTHING, **kwargs)


class FDBHeader(Chunk):
    table_count            = Count()
    table_header_list_addr = Address()


class TableHeader(Chunk):
    name_addr              = Address()
    table_def_header_addr  = Address()
    table_data_header_addr = Address()


class TableDefHeader(Chunk):
    column_count            = Count()
    column_header_list_addr = Address()


class ColumnHeader(Chunk):
    type_tag  = ValueTypeField()
    name_addr = Address()


class TableDataHeader(Chunk):
    bucket_count            = Count()
    bucket_header_list_addr = Address()


class BucketHeader(Chunk):
    row_header_list_head_addr = Address()


class RowHeaderListEntry(Chunk):
    '''Node of the list threading all the rows of a bucket'''
    row_header_addr           = Address()
    row_header_list_next_addr = Address()


class RowHeader(Chunk):
    field_count          = Count()
    field_data_list_addr = Address()


class FieldData(Chunk):
    '''The meaning of "data_value" depends on "type_tag": it can be the value itself
    or the address of the real one (see values.resolve_value()).'''
    type_tag   = ValueTypeField()
    data_value = fields.StructField('I')


class Int64Data(Chunk):
    '''Out of line value of a BIGINT field'''
    int64 = fields.StructField('q')
