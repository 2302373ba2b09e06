class FDBException(Exception):
    '''Base class to extend in order to throw exception in fdbstruct.

    The positional arguments of the subclasses are kept in "args"; "chain"
    is the list of the fields that caused the exception, innermost first.
    '''

    def __init__(self, *args, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(*args)

    def _chain_repr(self):
        return '.'.join(reversed(self.chain))


class UnpackException(FDBException):
    '''Raised by a record decoder: "offset" is relative to the bytes it was given,
    "code" is an opaque identifier of the mismatch.'''

    def __init__(self, offset, code, chain=None):
        self.offset = offset
        self.code = code
        super().__init__(offset, code, chain=chain)

    def __str__(self):
        return f'decoding failed at offset {self.offset} ({self.code}) {self._chain_repr()}'.rstrip()


class LocatedUnpackException(FDBException):
    '''An UnpackException annotated with the absolute address of the record
    (or of the list of records) that was being decoded.'''

    def __init__(self, addr, offset, code, chain=None):
        self.addr = addr
        self.offset = offset
        self.code = code
        super().__init__(addr, offset, code, chain=chain)

    @property
    def position(self):
        return self.addr + self.offset

    def __str__(self):
        return (
            f'decoding failed at 0x{self.position:08x} '
            f'(record at 0x{self.addr:08x} + 0x{self.offset:x}): {self.code} {self._chain_repr()}'
        ).rstrip()


class ShortReadException(FDBException):
    '''The byte source ended before the requested data was complete.

    When "expected" is None we were looking for a terminator.'''

    def __init__(self, addr, expected, got):
        self.addr = addr
        self.expected = expected
        self.got = got
        super().__init__(addr, expected, got)

    def __str__(self):
        if self.expected is None:
            return f'no terminator found after {self.got} bytes from 0x{self.addr:08x}'

        return f'short read at 0x{self.addr:08x}: wanted {self.expected} bytes, got {self.got}'


class CycleException(FDBException):
    '''A linked list pointed back to an address already visited.'''

    def __init__(self, addr):
        self.addr = addr
        super().__init__(addr)

    def __str__(self):
        return f'cycle detected at 0x{self.addr:08x}'
