"""
HTTP server for the public concordances API.
"""
