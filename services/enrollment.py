"""Enrollment service — customer memberships and QR lookup."""

import logging
import uuid
from dataclasses import dataclass

from clubman.exceptions import ClubmanError
from clubman.protocols.records import CommerceInfo, CustomerInfo, PlanType
from clubman.utils import normalize_phone, normalize_token

logger = logging.getLogger(__name__)


@dataclass
class EnrollmentResult:
    """Result of enrolling a customer."""

    ok: bool
    customer: CustomerInfo | None = None
    created: bool = False
    error_code: str | None = None
    message: str | None = None


def new_qr_token() -> str:
    """Short customer token printed in the QR code, e.g. CUST-1A2B3C4D."""
    return f"CUST-{uuid.uuid4().hex[:8].upper()}"


class EnrollmentService:
    """
    Service for joining a commerce's program.

    A phone number identifies one membership per commerce; enrolling the
    same phone again returns the existing membership.
    """

    def __init__(self, store=None):
        if store is None:
            from clubman.adapters import get_record_store

            store = get_record_store()
        self.store = store

    def enroll(self, commerce_id: str, name: str, phone: str, email: str = "") -> EnrollmentResult:
        """
        Enroll a customer in a commerce's program.

        Args:
            commerce_id: Commerce id
            name: Customer name
            phone: Phone in any format (normalized to E.164)
            email: Optional email

        Returns:
            EnrollmentResult (created=False when the phone was already a member)
        """
        try:
            commerce = self.store.get_by_id(CommerceInfo, commerce_id)
            if commerce is None:
                raise ClubmanError("UNKNOWN_COMMERCE", commerce_id=commerce_id)

            normalized = normalize_phone(phone)
            if normalized is None:
                raise ClubmanError("INVALID_PHONE", phone=phone)

            with self.store.atomic():
                members = self.store.filter(CustomerInfo, commerce_id=commerce_id)
                for member in members:
                    if member.phone == normalized:
                        return EnrollmentResult(ok=True, customer=member, created=False)

                if commerce.plan_type == PlanType.FREE and 0 < commerce.customer_limit <= len(members):
                    raise ClubmanError(
                        "CUSTOMER_LIMIT_REACHED",
                        commerce_id=commerce_id,
                        limit=commerce.customer_limit,
                    )

                customer = self.store.insert(
                    CustomerInfo(
                        commerce_id=commerce_id,
                        name=name.strip(),
                        phone=normalized,
                        email=(email or "").strip(),
                        qr_token=new_qr_token(),
                    )
                )
        except ClubmanError as e:
            logger.info("Enrollment rejected: %s %s", e.code, e.data)
            return EnrollmentResult(ok=False, error_code=e.code, message=e.message)

        logger.info("Customer %s enrolled in commerce %s", customer.id, commerce_id)
        return EnrollmentResult(ok=True, customer=customer, created=True)

    def find_by_token(self, commerce_id: str, raw: str) -> CustomerInfo | None:
        """Resolve a scanned QR payload to a member of the commerce."""
        token = normalize_token(raw)
        if not token:
            return None
        matches = self.store.filter(CustomerInfo, commerce_id=commerce_id, qr_token=token)
        return matches[0] if matches else None
