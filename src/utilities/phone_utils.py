import re
import logging

from config import settings

logger = logging.getLogger(__name__)

LOCAL_PHONE_LENGTH = 10


def digits_only(phone: str) -> str:
    return re.sub(r'\D', '', phone or '')


def is_valid_local_phone(phone: str) -> bool:
    """True when the number is exactly 10 digits with nothing else around it."""
    return bool(phone) and re.fullmatch(r'\d{10}', phone) is not None


def normalize_indian_phone(phone: str, country_code: str = None) -> str:
    """
    Normalize Indian phone numbers to international format (91XXXXXXXXXX).

    Rules:
    - If exactly 10 digits: add 91 prefix
      Example: 9876543210 -> 919876543210
    - If 11 digits starting with 0 (trunk prefix): drop 0, add 91 prefix
      Example: 09876543210 -> 919876543210
    - If already 12 digits starting with 91: keep as is
      Example: 919876543210 -> 919876543210
    - If has + prefix or spaces: stripped before the checks above

    Args:
        phone: Phone number string (may have spaces, dashes, etc.)
        country_code: Prefix to add to bare numbers (defaults to settings)

    Returns:
        Normalized phone number; unexpected lengths are returned digits-only
    """
    if not phone:
        return phone

    country_code = country_code or settings.DEFAULT_COUNTRY_CODE

    # Remove all non-digit characters (spaces, dashes, parentheses, etc.)
    cleaned_phone = digits_only(phone)

    # If empty after cleaning, return original
    if not cleaned_phone:
        logger.warning(f"Phone number has no digits: {phone}")
        return phone

    # Case 1: bare local number
    if len(cleaned_phone) == LOCAL_PHONE_LENGTH:
        return country_code + cleaned_phone

    # Case 2: local number dialled with trunk prefix 0
    elif len(cleaned_phone) == LOCAL_PHONE_LENGTH + 1 and cleaned_phone.startswith('0'):
        return country_code + cleaned_phone[1:]

    # Case 3: already carries the country code
    elif cleaned_phone.startswith(country_code) and len(cleaned_phone) == LOCAL_PHONE_LENGTH + len(country_code):
        return cleaned_phone

    # Case 4: some other international number, leave it alone
    else:
        logger.warning(f"Unexpected phone format: {phone} (cleaned: {cleaned_phone})")
        return cleaned_phone


def to_local_phone(phone: str) -> str:
    """
    Convert a phone number to the 10-digit local form used on the invoice form.

    Example: +91 98765 43210 -> 9876543210
    """
    if not phone:
        return phone

    cleaned_phone = digits_only(phone)

    if len(cleaned_phone) > LOCAL_PHONE_LENGTH:
        return cleaned_phone[-LOCAL_PHONE_LENGTH:]
    return cleaned_phone
