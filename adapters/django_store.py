"""Django ORM RecordStore adapter."""

import uuid
from dataclasses import fields

from django.apps import apps
from django.db import transaction

from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    ReminderLogInfo,
    RewardInfo,
    TransactionInfo,
    table_for,
)

_MODEL_NAMES = {
    CommerceInfo: "Commerce",
    CustomerInfo: "Customer",
    TransactionInfo: "Transaction",
    RewardInfo: "Reward",
    ReminderLogInfo: "ReminderLog",
}


def _model_for(record_type):
    table_for(record_type)
    return apps.get_model("clubman", _MODEL_NAMES[record_type])


def _field_names(record_type) -> set[str]:
    return {f.name for f in fields(record_type)}


def _to_record(record_type, obj):
    values = {}
    for f in fields(record_type):
        value = getattr(obj, f.name)
        values[f.name] = str(value) if isinstance(value, uuid.UUID) else value
    return record_type(**values)


_UUID_FIELDS = {
    "id",
    "commerce_id",
    "customer_id",
    "points_reward_id",
    "stars_reward_id",
    "redeemed_reward_id",
}


def _pk(record_id) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        return None


class DjangoRecordStore:
    """
    RecordStore backed by clubman.models.

    Record fields map 1:1 to model attributes (foreign keys by attname,
    e.g. commerce_id). Ids are UUIDs in the database and strings in records.
    """

    def get_all(self, record_type):
        model = _model_for(record_type)
        return [_to_record(record_type, obj) for obj in model.objects.all()]

    def get_by_id(self, record_type, record_id, for_update=False):
        model = _model_for(record_type)
        pk = _pk(record_id)
        if pk is None:
            return None
        qs = model.objects.all()
        if for_update:
            qs = qs.select_for_update()
        try:
            return _to_record(record_type, qs.get(pk=pk))
        except model.DoesNotExist:
            return None

    def insert(self, record):
        record_type = type(record)
        model = _model_for(record_type)
        values = {f.name: getattr(record, f.name) for f in fields(record_type)}
        if values.get("created_at") is None:
            values.pop("created_at", None)
        # None means "unset" on records; let model-level defaults apply.
        for name in [n for n, v in values.items() if v is None]:
            field = model._meta.get_field(name)
            if field.has_default():
                values.pop(name)
        obj = model.objects.create(**values)
        return _to_record(record_type, obj)

    def update(self, record_type, record_id, **changes):
        model = _model_for(record_type)
        unknown = set(changes) - _field_names(record_type)
        if unknown or "id" in changes:
            raise TypeError(f"Cannot update fields {sorted(unknown | ({'id'} & set(changes)))}")
        pk = _pk(record_id)
        if pk is None:
            return None
        if changes and not model.objects.filter(pk=pk).update(**changes):
            return None
        return self.get_by_id(record_type, record_id)

    def delete(self, record_type, record_id):
        model = _model_for(record_type)
        pk = _pk(record_id)
        if pk is None:
            return False
        deleted, _ = model.objects.filter(pk=pk).delete()
        return deleted > 0

    def filter(self, record_type, predicate=None, **equals):
        model = _model_for(record_type)
        unknown = set(equals) - _field_names(record_type)
        if unknown:
            raise TypeError(f"Unknown fields {sorted(unknown)}")
        lookups = {}
        for key, value in equals.items():
            if key in _UUID_FIELDS and value is not None:
                value = _pk(value)
                if value is None:
                    return []
            lookups[key] = value
        rows = [_to_record(record_type, obj) for obj in model.objects.filter(**lookups)]
        if predicate is None:
            return rows
        return [row for row in rows if predicate(row)]

    def atomic(self):
        return transaction.atomic()
