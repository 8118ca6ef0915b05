"""Domain enums for the token codec."""
from enum import Enum


class NodeKind(Enum):
    """Shape of one raw value node, decided before recursing."""
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAP_ENCODING = "map_encoding"
    VECTOR_ENCODING = "vector_encoding"
    PLAIN_OBJECT = "plain_object"


class SegmentKind(Enum):
    """Segment kinds of a mixed value."""
    ALIAS = "alias"
    TEXT = "text"


class ValueKind(Enum):
    """Rendering strategy for a token value."""
    ALIAS = "alias"
    MIXED = "mixed"
    PLAIN = "plain"


class EditorMode(Enum):
    """Alias editor modes."""
    EDIT = "edit"
    LIST = "list"
