#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Orrery Tools Package

This package provides utility tools for the orrery, including:

- State Export: Write sampled body and probe states to JSON
"""

from .export_states import (
    StateExporter,
    StateRecord,
    StateTrack,
    export_states,
    load_track,
    sample_times,
)

__all__ = [
    "StateExporter",
    "StateRecord",
    "StateTrack",
    "export_states",
    "load_track",
    "sample_times",
]
