"""Commerce maintenance operations."""

import logging

from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    ReminderLogInfo,
    RewardInfo,
    TransactionInfo,
)

logger = logging.getLogger(__name__)

# Children first; the commerce row goes last.
_DEPENDENTS = (ReminderLogInfo, TransactionInfo, CustomerInfo, RewardInfo)


def delete_commerce_cascade(store, commerce_id: str) -> bool:
    """
    Delete a commerce and every record that belongs to it.

    Returns:
        False if the commerce did not exist
    """
    with store.atomic():
        if store.get_by_id(CommerceInfo, commerce_id) is None:
            return False
        # The reward references on the commerce must be cleared before the rewards go.
        store.update(CommerceInfo, commerce_id, points_reward_id=None, stars_reward_id=None)
        removed = 0
        for record_type in _DEPENDENTS:
            for record in store.filter(record_type, commerce_id=commerce_id):
                removed += store.delete(record_type, record.id)
        store.delete(CommerceInfo, commerce_id)

    logger.info("Commerce %s deleted with %d dependent records", commerce_id, removed)
    return True
