'''
This module contains the constant values used throught the FDB format.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import Enum


# address of "no element", terminates every linked list
NULL_ADDR = 0xffffffff


class ValueType(Enum):
    '''Type tag of a column and of each field stored in a row'''
    NOTHING  = 0
    INTEGER  = 1
    UNKNOWN1 = 2
    FLOAT    = 3
    TEXT     = 4
    BOOLEAN  = 5
    BIGINT   = 6
    UNKNOWN2 = 7
    VARCHAR  = 8
