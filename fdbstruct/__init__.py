"""
# fdbstruct: random access to FDB database files.

A FDB file is a set of fixed-size records pointing to each other via absolute
addresses, plus zero terminated strings. Nothing is loaded up front: every
access seeks to an address and decodes only the bytes it needs.

The package is layered as follows

 1. records: a record is declared as a Chunk made of Fields (core.py, fields.py),
    the class knows its width ("byte_width") and builds an instance out of that many
    bytes ("decode()"); an instance can be encoded back via its "raw" attribute.

 2. accessors: Stream (streams.py) decodes a record, a list of contiguous records
    or a string at a given address, reporting where a decoding failed.

 3. formats: databases/fdb/ declares the records of the FDB format and the
    DatabaseReader that walks them header after header.

Errors are instances of exceptions.FDBException.
"""
