"""Test helper modules.

- io_utils: writing YAML/JSON/text fixture files
- profiles: building a fake editor user directory with profiles
"""
