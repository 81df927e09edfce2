"""
Models package - resume value objects and enums
"""
from app.models.enums import ExportFormat, HeaderRule, HeadingDecoration, LayoutKind
from app.models.resume import (
    CANONICAL_ORDER,
    Block,
    BulletItem,
    ContactInfo,
    LayoutLine,
    Prose,
    RenderedDocument,
    Run,
    SectionName,
    SegmentedResume,
    Spacer,
    SubHeading,
)

__all__ = [
    # Enums
    'ExportFormat',
    'HeaderRule',
    'HeadingDecoration',
    'LayoutKind',
    # Resume models
    'CANONICAL_ORDER',
    'SectionName',
    'ContactInfo',
    'SegmentedResume',
    'BulletItem',
    'SubHeading',
    'Prose',
    'Spacer',
    # Render output
    'LayoutLine',
    'Run',
    'Block',
    'RenderedDocument',
]
