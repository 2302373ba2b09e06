#!/usr/bin/env python3
import sys
import os
import logging

from fdbstruct.exceptions import FDBException
from fdbstruct.databases.fdb.reader import DatabaseReader
from fdbstruct.databases.fdb.values import resolve_row


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <fdb file> [<table name>]' % progname)
    sys.exit(1)


def dump_header(header):
    print(f'''FDB Header:
  Number of tables:                  {header.table_count.value}
  Start of table headers:            0x{header.table_header_list_addr.value:08x}''')


def dump_tables(db, tables):
    for table in tables:
        def_header = db.get_table_def_header(table.table_def_header_addr.value)
        data_header = db.get_table_data_header(table.table_data_header_addr.value)
        print(f'''
Table {db.get_table_name(table)} ({def_header.column_count.value} columns, {data_header.bucket_count.value} buckets):''')
        for column in db.get_column_header_list(def_header):
            print(f'''  {db.get_column_name(column):<40} {column.type_tag.value}''')


def dump_rows(db, table):
    def_header = db.get_table_def_header(table.table_def_header_addr.value)
    names = [db.get_column_name(_) for _ in db.get_column_header_list(def_header)]

    print('\t'.join(names))

    for addr in db.iter_table_rows(table):
        if isinstance(addr, Exception):
            logger.warning(f'skipping the rest of a bucket: {addr}')
            continue

        try:
            row = resolve_row(db, addr)
        except FDBException as e:
            logger.warning(f'row at 0x{addr:08x} is broken: {e}')
            continue

        print('\t'.join(str(_) for _ in row))


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]
    table_name = sys.argv[2] if len(sys.argv) > 2 else None

    with DatabaseReader(path, detect_cycles=True) as db:
        header = db.get_header()
        tables = db.get_table_header_list(header)

        if table_name is None:
            dump_header(header)
            dump_tables(db, tables)
            sys.exit(0)

        for table in tables:
            if db.get_table_name(table) == table_name:
                dump_rows(db, table)
                break
        else:
            print(f'no table named \'{table_name}\'')
            sys.exit(1)
