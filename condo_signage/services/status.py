import logging
from datetime import date, datetime
from enum import Enum

logger = logging.getLogger(__name__)


class Status(str, Enum):
    ACTIVE = "ativo"
    INACTIVE = "inativo"


def parse_date(value: date | datetime | str | None) -> date | None:
    """Return the calendar date of ``value`` or None when absent or unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("unparseable expiration date %r treated as no expiration", raw)
        return None


def compute_status(
    expiration_date: date | datetime | str | None,
    reference_date: date | datetime | None = None,
) -> Status:
    """
    Derive display eligibility from an expiration date.

    Both sides are compared as calendar dates, so an item expiring today
    stays active for the whole day. A missing or malformed expiration date
    means the item never expires.
    """
    expires_on = parse_date(expiration_date)
    if expires_on is None:
        return Status.ACTIVE
    today = parse_date(reference_date) or date.today()
    return Status.ACTIVE if expires_on >= today else Status.INACTIVE


def is_eligible(
    expiration_date: date | datetime | str | None,
    reference_date: date | datetime | None = None,
) -> bool:
    return compute_status(expiration_date, reference_date) is Status.ACTIVE


def sync_status(item, today: date | None = None) -> bool:
    """Write the derived status onto ``item``; True when the stored value changed."""
    next_status = compute_status(item.data_expiracao, today).value
    if item.status != next_status:
        item.status = next_status
        return True
    return False
