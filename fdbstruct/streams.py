import io
import logging
import os

from .exceptions import (
    UnpackException,
    LocatedUnpackException,
    ShortReadException,
)


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path/file objects to
    uniform their properties: mainly we need a seek() to an absolute
    address and a read that fails instead of returning less data.

    A file opened from a path is owned by the stream and closed with it,
    a file object passed in is only borrowed.

    Every method moves the cursor of the underlying object so a stream
    must not be shared between threads.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj
        self.owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.obj)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self.owned:
            self.obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self.owned = True

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes

    def init_file(self):
        '''Anything else must already behave like a binary file'''
        if not (hasattr(self.obj, 'seek') and hasattr(self.obj, 'read')):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        if offset < 0:
            raise ValueError(f'negative offset {offset}')

        logger.debug('seek at 0x%08x' % offset)
        self.obj.seek(offset)

    def read_exact(self, n):
        '''Read exactly n bytes or raise ShortReadException'''
        addr = self.obj.tell()
        data = self.obj.read(n)

        if len(data) != n:
            raise ShortReadException(addr, n, len(data))

        return data

    def read_until(self, terminator=b'\x00'):
        '''Read byte by byte until "terminator" is found: it's consumed
        but not returned. If the data ends first ShortReadException is raised.'''
        addr = self.obj.tell()
        data = []
        while True:
            b = self.obj.read(1)
            if len(b) == 0:
                raise ShortReadException(addr, None, len(data))
            if b == terminator:
                break
            data.append(b)

        return b''.join(data)

    def read_string(self, addr):
        '''Read the zero terminated Windows-1252 text at "addr".'''
        self.seek(addr)

        # undefined code points become U+FFFD, decoding never fails
        return self.read_until(b'\x00').decode('cp1252', errors='replace')

    def unpack_at(self, addr, record):
        '''Decode a single "record" (anything with "byte_width" and "decode()")
        at the absolute address "addr".'''
        self.seek(addr)
        raw = self.read_exact(record.byte_width)

        logger.debug('unpacking %s at 0x%08x' % (getattr(record, '__name__', record), addr))

        try:
            return record.decode(raw)
        except UnpackException as e:
            raise LocatedUnpackException(addr, e.offset, e.code, chain=e.chain) from e

    def unpack_list_at(self, addr, count, record):
        '''Decode "count" contiguous records starting at "addr", seeking only once.

        The offset of a failure is relative to "addr", i.e. it takes into account
        the elements already decoded.'''
        if count == 0:
            return []

        self.seek(addr)

        width = record.byte_width
        elements = []
        offset = 0

        logger.debug('unpacking %d x %s at 0x%08x' % (count, getattr(record, '__name__', record), addr))

        for _ in range(count):
            raw = self.read_exact(width)
            try:
                elements.append(record.decode(raw))
            except UnpackException as e:
                raise LocatedUnpackException(addr, offset + e.offset, e.code, chain=e.chain) from e

            offset += width

        return elements
