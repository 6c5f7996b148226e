"""Domain layer for petnote.

Pure models and functions only. Nothing in this package performs I/O;
persistence is reached through the DocumentStore port in the
application layer.
"""
