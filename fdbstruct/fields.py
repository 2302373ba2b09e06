"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct
from enum import Enum

from .enum import Compliant
from .meta import FieldBase
from .exceptions import UnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *, name=None, father=None, default=None, offset=None, compliant=Compliant.INHERIT):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.compliant = compliant

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns the compliant'''
        instance = self
        while instance:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def unpack(self, data: bytes):
        '''Set the value of the field from the buffer "data" representing the whole
        record; the field's own bytes start at self.offset.'''
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        if not isinstance(self.value, Enum):
            return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

        return f'<{self.__class__.__name__}({self.value!r})>'

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % (self.value if not isinstance(self.value, Enum) else self.value.value,)

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_format(self):
        return '<%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value if not isinstance(self.value, Enum) else self.value.value)

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack(raw)

    def _unpack_struct(self, value: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), value)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException(offset=self.offset or 0, code='struct')

        return unpacked_value

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise UnpackException(offset=self.offset or 0, code='enum')

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, raw):
        value = self._unpack_struct(raw)
        if self.enum:
            value = self._unpack_enum(value)

        return value

    def unpack(self, data: bytes):
        offset = self.offset or 0
        self.value = self._unpack(data[offset:offset + self.size])
