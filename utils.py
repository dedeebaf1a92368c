"""Clubman utilities: phone and QR token normalization."""

import re

import phonenumbers

from clubman.conf import clubman_settings

_TOKEN_RE = re.compile(r"CUST-[0-9A-Z]+", re.IGNORECASE)
_ROUTE_MARKERS = ("#/q/", "/q/")
_SEPARATORS = re.compile(r"[?#/]")


def normalize_phone(phone: str, region: str | None = None) -> str | None:
    """
    Normalize a phone number to E.164.

    Numbers without a country code are read in ``region`` (defaults to
    CLUBMAN["DEFAULT_REGION"]).

    Returns:
        "+5491155551234" style string, or None when it cannot be a phone number
    """
    if not phone or not str(phone).strip():
        return None
    try:
        parsed = phonenumbers.parse(str(phone), region or clubman_settings.DEFAULT_REGION)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_possible_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def normalize_token(raw: str) -> str:
    """
    Extract a customer QR token from a scanned payload.

    Accepts an app URL ("https://app/#/q/CUST-1A2B3C4D", ".../q/<token>"),
    any text embedding a CUST- token, or the bare token.
    """
    text = (raw or "").strip()
    for marker in _ROUTE_MARKERS:
        _, found, rest = text.partition(marker)
        if found and rest:
            return _SEPARATORS.split(rest, maxsplit=1)[0].strip()

    match = _TOKEN_RE.search(text)
    if match:
        return match.group(0).upper()
    return _SEPARATORS.split(text, maxsplit=1)[0].strip()
