"""Consumers of buildlog events.

Modules
-------
console
    ``ConsoleWriter`` validates build and task phase changes and renders
    them, together with log messages, to ``stderr``.
progress
    ``ProgressIndicator`` wraps the Rich live progress bar used by the
    console writer.
"""
