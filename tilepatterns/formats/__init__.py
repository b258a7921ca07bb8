"""
File formats.

Map files, hex row helpers and the compact JSON writer used for pattern
snapshots.
"""
