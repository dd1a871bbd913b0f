"""
Application layer module.

Wires key derivation, the file store and the codec into the memoizing wrapper.
"""
