"""
Core extraction logic: task extraction pipeline, rich text conversion, exceptions.
"""
