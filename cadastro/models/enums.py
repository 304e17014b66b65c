"""Enumeration types for registration records."""

from enum import Enum


class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
