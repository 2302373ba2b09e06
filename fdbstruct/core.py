"""
Core module for the abstraction of a record

"""
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .exceptions import UnpackException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks.

    The class itself is a record decoder: "byte_width" (from the metaclass) tells
    how many bytes a record occupies and decode() builds a new instance out of
    exactly that many bytes. Keyword arguments named as the fields set their values,
    so that the same declaration can be used to encode a record via "raw".
    """

    def __init__(self, **kwargs):
        values = {_: kwargs.pop(_) for _ in self._meta.fields if _ in kwargs}

        super().__init__(**kwargs)

        for field_name, value in values.items():
            setattr(self, field_name, value)

        self.relayout(offset=self.offset or 0)

    @classmethod
    def decode(cls, raw: bytes) -> "Chunk":
        chunk = cls()
        chunk.unpack(raw)

        return chunk

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name in self._meta.fields:
            field = getattr(self, field_name)
            msg += '%s: %s\n' % (field_name, str(field))
        return msg

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented

        return [_.value for __, _ in self.get_fields()] == [_.value for __, _ in other.get_fields()]

    __hash__ = None

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return self

    def _set_value(self, value):
        raise AttributeError(f'a {self.__class__.__name__} has no single value to set')

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for field_name in self._meta.fields:
            field = getattr(self, field_name)
            size += field.size

        return size

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '{}' raw={}".format(field_name, field_raw))
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            size += field_instance.relayout(offset=offset + size)

        return size

    def unpack(self, data: bytes):
        '''Fill the fields from "data" that must contain the whole record this chunk
        is part of: the fields know their offsets from the last relayout.

        The first field that fails raises UnpackException with the offset relative
        to "data" and the chain of field names that lead to it.'''
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, field.offset))

            try:
                field.unpack(data)
            except UnpackException as e:
                e.chain.append(field_name)
                raise
