"""Producers of buildlog events.

Modules
-------
logger
    ``Logger`` emits leveled ``log`` events for one module.
build
    ``BuildTracker`` reports the projects of a build run and their phases.
project_build
    ``ProjectTaskTracker`` reports the tasks of one project and their phases.
"""
