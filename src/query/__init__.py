"""Query evaluation layer.

This package matches documents against expression lists and runs the
filter, sort, skip, and limit stages behind find and count.
"""
