"""
Directory module: teacher-facing lookups over the user table.
"""
