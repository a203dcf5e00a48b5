"""In-memory storage layer.

This package holds named document collections, path navigation for
patches, seed file loading, and the public store facade.
"""
