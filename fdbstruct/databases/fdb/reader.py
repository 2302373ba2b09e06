'''
Low-level reader for FDB files.

It gives access to a FDB file in any order the user desires: every method
takes an address (or a header previously read containing one) and returns
freshly decoded records, nothing is cached.

The errors raised are the ones of the stream, i.e. ShortReadException (or an
OSError from the underlying file) and LocatedUnpackException.
'''
import logging
from typing import Iterator, List, Union

from ...exceptions import FDBException, CycleException
from ...streams import Stream
from . import (
    FDBHeader,
    TableHeader,
    TableDefHeader,
    ColumnHeader,
    TableDataHeader,
    BucketHeader,
    RowHeaderListEntry,
    RowHeader,
    FieldData,
    Int64Data,
)
from .enum import NULL_ADDR


logger = logging.getLogger(__name__)


class RowHeaderAddrIterator(object):
    '''Walk the list of rows hanging from a bucket yielding the address of
    each row header.

    A failure doesn't raise: the exception is yielded as the last element
    so that the caller can skip the bucket and go on with the next one.

    Files are not trusted to be well formed but a chain pointing back to
    itself is followed forever unless "detect_cycles" is set, in that case
    a CycleException is yielded as the last element.'''

    def __init__(self, reader: "DatabaseReader", addr: int, detect_cycles=False):
        self.reader = reader
        self.next_addr = addr
        self._visited = set() if detect_cycles else None

    def __iter__(self):
        return self

    def __next__(self) -> Union[int, Exception]:
        addr = self.next_addr

        if addr == NULL_ADDR:
            raise StopIteration

        if self._visited is not None:
            if addr in self._visited:
                logger.warning('row list loops back to 0x%08x' % addr)
                self.next_addr = NULL_ADDR
                return CycleException(addr)

            self._visited.add(addr)

        try:
            entry = self.reader.get_row_header_list_entry(addr)
        except (FDBException, OSError) as e:
            logger.debug('row list broken at 0x%08x: %s' % (addr, e))
            self.next_addr = NULL_ADDR
            return e

        self.next_addr = entry.row_header_list_next_addr.value

        return entry.row_header_addr.value


class DatabaseReader(object):
    '''Access a FDB file via its headers.

    "source" can be a Stream or anything a Stream can be built from (path,
    bytes, file object); the cursor of the underlying object is moved around
    by every call.'''

    def __init__(self, source, detect_cycles=False):
        self.stream = source if isinstance(source, Stream) else Stream(source)
        self.detect_cycles = detect_cycles

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.stream.close()

    def get_header(self) -> FDBHeader:
        '''Read the schema header'''
        return self.stream.unpack_at(0, FDBHeader)

    def get_table_header_list(self, header: FDBHeader) -> List[TableHeader]:
        return self.stream.unpack_list_at(
            header.table_header_list_addr.value,
            header.table_count.value,
            TableHeader,
        )

    def get_table_def_header(self, addr: int) -> TableDefHeader:
        return self.stream.unpack_at(addr, TableDefHeader)

    def get_column_header_list(self, header: TableDefHeader) -> List[ColumnHeader]:
        return self.stream.unpack_list_at(
            header.column_header_list_addr.value,
            header.column_count.value,
            ColumnHeader,
        )

    def get_table_data_header(self, addr: int) -> TableDataHeader:
        return self.stream.unpack_at(addr, TableDataHeader)

    def get_bucket_header_list(self, header: TableDataHeader) -> List[BucketHeader]:
        return self.stream.unpack_list_at(
            header.bucket_header_list_addr.value,
            header.bucket_count.value,
            BucketHeader,
        )

    def get_row_header_list_entry(self, addr: int) -> RowHeaderListEntry:
        return self.stream.unpack_at(addr, RowHeaderListEntry)

    def get_row_header(self, addr: int) -> RowHeader:
        return self.stream.unpack_at(addr, RowHeader)

    def get_field_data_list(self, header: RowHeader) -> List[FieldData]:
        return self.stream.unpack_list_at(
            header.field_data_list_addr.value,
            header.field_count.value,
            FieldData,
        )

    def get_row(self, addr: int) -> List[FieldData]:
        '''The fields of the row whose header is at "addr", as stored.'''
        return self.get_field_data_list(self.get_row_header(addr))

    def get_i64(self, addr: int) -> int:
        '''Get a 64bit integer'''
        return self.stream.unpack_at(addr, Int64Data).int64.value

    def get_string(self, addr: int) -> str:
        return self.stream.read_string(addr)

    def get_table_name(self, header: TableHeader) -> str:
        return self.get_string(header.name_addr.value)

    def get_column_name(self, header: ColumnHeader) -> str:
        return self.get_string(header.name_addr.value)

    def get_row_header_addr_iterator(self, addr: int) -> RowHeaderAddrIterator:
        return RowHeaderAddrIterator(self, addr, detect_cycles=self.detect_cycles)

    def iter_table_rows(self, header: TableHeader) -> Iterator[Union[int, Exception]]:
        '''Yield the row header addresses (or errors) of every bucket of a table,
        in bucket order; a broken bucket doesn't stop the iteration.'''
        data_header = self.get_table_data_header(header.table_data_header_addr.value)

        for bucket in self.get_bucket_header_list(data_header):
            yield from self.get_row_header_addr_iterator(bucket.row_header_list_head_addr.value)
