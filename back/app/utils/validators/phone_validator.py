# Standard library imports
import re

# Third-party imports
import phonenumbers

# Local application imports
from app.settings import settings

_SEPARATORS = re.compile(r"[\s\-().]")


def validate_phone_number(value: str | None, region: str | None = None) -> str | None:
    """
    Validate and normalize a phone number to E.164 using the `phonenumbers` library.
    Numbers without a country code are parsed for the default region (India).
    Returns None when the number cannot be parsed or is not valid.
    """
    if value is None:
        return value  # Allow None values (optional fields)

    region = region or settings.DEFAULT_PHONE_REGION
    cleaned = _SEPARATORS.sub("", str(value).strip())

    # "91XXXXXXXXXX" typed without the plus sign
    if region == "IN" and cleaned.isdigit() and cleaned.startswith("91") and len(cleaned) == 12:
        cleaned = f"+{cleaned}"

    try:
        parsed = phonenumbers.parse(cleaned, region)
    except phonenumbers.NumberParseException:
        return None

    if not phonenumbers.is_valid_number(parsed):
        return None

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def admin_id_from_phone(phone: str) -> str:
    """Administrator id: the phone number with "+" and separators stripped."""
    return re.sub(r"\D", "", phone)
