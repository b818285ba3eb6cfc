"""
models/ - Domain Layer
======================
Validated in-memory records for authors and tweets, plus the shared
field validators and error types they raise.
"""
