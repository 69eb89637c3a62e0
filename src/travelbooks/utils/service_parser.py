"""Service line parsing utilities."""

from travelbooks.domain.entities import Currency, ServiceLine, ServiceType
from travelbooks.utils.amount_parser import parse_money
from travelbooks.utils.date_parser import parse_date

_ALIASES = {
    "quantity": "qty",
    "cost_price": "cost",
    "selling_price": "price",
    "check_in": "check-in",
    "checkin": "check-in",
    "check_out": "check-out",
    "checkout": "check-out",
    "room_count": "rooms",
    "inventory_id": "inventory",
}
KNOWN_KEYS = (
    "type",
    "qty",
    "cost",
    "currency",
    "price",
    "supplier",
    "check-in",
    "check-out",
    "rooms",
    "inventory",
    "details",
)


def _positive_int(key: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"'{key}' must be a whole number, got '{value}'")
    if number < 0:
        raise ValueError(f"'{key}' cannot be negative, got {number}")
    return number


def parse_service_line(text: str) -> ServiceLine:
    """Parse a service line from ``key=value`` pairs separated by commas.

    Example: ``type=hotel,cost=50 USD,rooms=2,check-in=2024-01-01,check-out=2024-01-04``

    Recognized keys are type, qty, cost, currency, price, supplier, check-in,
    check-out, rooms, inventory and details. A currency written in the cost
    ("50 USD", "$50") is used unless ``currency`` is given explicitly.

    Raises:
        ValueError: If a pair is malformed, a key is unknown or a value
            cannot be parsed
    """
    fields: dict[str, str] = {}
    for part in text.split(","):
        if not part.strip():
            continue
        if "=" not in part:
            raise ValueError(f"Expected key=value in service '{text}', got '{part.strip()}'")
        key, value = part.split("=", 1)
        key = key.strip().lower()
        key = _ALIASES.get(key, key)
        if key not in KNOWN_KEYS:
            raise ValueError(f"Unknown service field '{key}'. Known fields: {', '.join(KNOWN_KEYS)}")
        fields[key] = value.strip()

    try:
        service_type = ServiceType(fields.get("type", ServiceType.OTHER.value).lower())
    except ValueError:
        choices = ", ".join(t.value for t in ServiceType)
        raise ValueError(f"Unknown service type '{fields['type']}'. Choose from: {choices}")

    line = {"service_type": service_type}
    cost_currency = None
    if "cost" in fields:
        line["cost_price"], cost_currency = parse_money(fields["cost"])
    if "currency" in fields:
        try:
            cost_currency = Currency(fields["currency"].upper())
        except ValueError:
            raise ValueError(f"Unknown currency '{fields['currency']}'")
    if cost_currency is not None:
        line["cost_currency"] = cost_currency
    if "price" in fields:
        line["selling_price"], _ = parse_money(fields["price"])
    if "qty" in fields:
        line["quantity"] = _positive_int("qty", fields["qty"])
    if "rooms" in fields:
        line["room_count"] = _positive_int("rooms", fields["rooms"])
    if "inventory" in fields:
        line["inventory_id"] = _positive_int("inventory", fields["inventory"])
    if fields.get("check-in"):
        line["check_in"] = parse_date(fields["check-in"])
    if fields.get("check-out"):
        line["check_out"] = parse_date(fields["check-out"])
    if fields.get("supplier"):
        line["supplier"] = fields["supplier"]
    if fields.get("details"):
        line["details"] = fields["details"]

    return ServiceLine(**line)
