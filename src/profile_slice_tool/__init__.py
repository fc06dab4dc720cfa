"""
Profile Slice Tool Package
"""

from .version import __version__
from .errors import (
    ProfileSliceError,
    InvalidWindowError,
    UnknownFrameReferenceError,
    InvalidDocumentError,
    StackDisciplineError,
)
from .models import Frame, CallTreeNode, Profile, ProfileGroup, Event, EventType, WeightUnit
from .call_tree_builder import CallTreeProfileBuilder
from .codec import FrameInterner, encode, encode_group, decode
from .interval_filter import filter_events_with_context, FilterResult, FrameState, TieBreak
from .compactor import compact_frames
from .serializer import build_interval_document, export_profile_group, dumps_document, save_document
from .parser import import_profile_group, load_profile_group, parse_profile_document
from .pipeline import export_interval, IntervalExport
from .text_export import export_interval_text

__all__ = [
    '__version__',
    'ProfileSliceError',
    'InvalidWindowError',
    'UnknownFrameReferenceError',
    'InvalidDocumentError',
    'StackDisciplineError',
    'Frame',
    'CallTreeNode',
    'Profile',
    'ProfileGroup',
    'Event',
    'EventType',
    'WeightUnit',
    'CallTreeProfileBuilder',
    'FrameInterner',
    'encode',
    'encode_group',
    'decode',
    'filter_events_with_context',
    'FilterResult',
    'FrameState',
    'TieBreak',
    'compact_frames',
    'build_interval_document',
    'export_profile_group',
    'dumps_document',
    'save_document',
    'import_profile_group',
    'load_profile_group',
    'parse_profile_document',
    'export_interval',
    'IntervalExport',
    'export_interval_text',
]
