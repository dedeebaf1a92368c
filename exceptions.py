"""Clubman exceptions."""


class ClubmanError(Exception):
    """
    Structured exception for loyalty operations.

    Usage:
        try:
            result = AccrualService().register_purchase(commerce_id, customer_id, amount)
        except ClubmanError as e:
            if e.code == "INVALID_CONFIGURATION":
                report(e.as_dict())
    """

    _default_messages = {
        "INVALID_AMOUNT": "Purchase amount must be a non-negative number",
        "UNKNOWN_CUSTOMER": "Customer not found",
        "UNKNOWN_COMMERCE": "Commerce not found",
        "REWARD_MISMATCH": "Reward cannot be redeemed",
        "COUPON_UNAVAILABLE": "No coupon available to apply",
        "INVALID_CONFIGURATION": "Invalid program configuration",
        "INVALID_REMINDER_TYPE": "Invalid reminder type",
        "INVALID_REMINDER_STATUS": "Invalid reminder status",
        "UNKNOWN_TABLE": "Record type is not part of the store schema",
        "INVALID_PHONE": "Invalid phone number",
        "CUSTOMER_LIMIT_REACHED": "Customer limit reached for this plan",
        "DATA_INTEGRITY": "Balance would go negative; clamped to zero",
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}
