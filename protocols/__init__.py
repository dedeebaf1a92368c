"""Clubman protocols."""

from clubman.protocols.records import (
    SCHEMA,
    CommerceInfo,
    CustomerInfo,
    EntryMethod,
    PlanType,
    PointsMode,
    Priority,
    Record,
    ReminderLogInfo,
    ReminderStatus,
    ReminderType,
    RewardInfo,
    RewardType,
    TransactionInfo,
    table_for,
)
from clubman.protocols.store import RecordStore
from clubman.protocols.usage import UsageInfo, UsageLimiter

__all__ = [
    # Records
    "SCHEMA",
    "Record",
    "CommerceInfo",
    "CustomerInfo",
    "TransactionInfo",
    "RewardInfo",
    "ReminderLogInfo",
    "table_for",
    # Choices
    "EntryMethod",
    "PlanType",
    "PointsMode",
    "Priority",
    "ReminderStatus",
    "ReminderType",
    "RewardType",
    # Store
    "RecordStore",
    # Usage
    "UsageInfo",
    "UsageLimiter",
]
