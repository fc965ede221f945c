"""Cleaning Tracker package.

Feature modules (machines, cleanings, users, archive, stats, ...) sit on top of
a document store adapter, with a thin Flask controller layer and
service/repository layers.
"""
