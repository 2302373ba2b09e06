'''
Interpretation of the fields of a row.

A FieldData stores 32 bits whose meaning depends on its type tag: numbers
narrow enough are stored inline, text and 64bit integers are stored elsewhere
in the file and "data_value" is their address.
'''
import logging
from typing import List

from bitstring import Bits

from .enum import ValueType


logger = logging.getLogger(__name__)


def _reinterpret(value: int) -> Bits:
    return Bits(uint=value, length=32)


def resolve_value(reader, field):
    '''Return the python value of "field" (a FieldData), reading from
    "reader" the values that are not inline.'''
    type_tag = field.type_tag.value
    value = field.data_value.value

    if type_tag == ValueType.NOTHING:
        return None
    elif type_tag == ValueType.INTEGER:
        return _reinterpret(value).int
    elif type_tag == ValueType.FLOAT:
        return _reinterpret(value).float
    elif type_tag == ValueType.BOOLEAN:
        return value != 0
    elif type_tag in (ValueType.TEXT, ValueType.VARCHAR):
        return reader.get_string(value)
    elif type_tag == ValueType.BIGINT:
        return reader.get_i64(value)

    # UNKNOWN1, UNKNOWN2 and tags tolerated by a non compliant field
    logger.debug(f'no interpretation for type {type_tag!r}, returning it raw')

    return value


def resolve_row(reader, addr: int) -> List:
    return [resolve_value(reader, _) for _ in reader.get_row(addr)]
