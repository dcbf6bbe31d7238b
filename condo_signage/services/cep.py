import re

CEP_DIGITS = 8


def normalize_cep(value: str | None) -> str:
    """Strip everything but digits; raise ValueError unless exactly 8 remain."""
    digits = re.sub(r"\D", "", value or "")
    if len(digits) != CEP_DIGITS:
        raise ValueError("CEP deve ter 8 dígitos")
    return digits


def format_cep(value: str | None) -> str:
    digits = re.sub(r"\D", "", value or "")
    if len(digits) != CEP_DIGITS:
        return value or ""
    return f"{digits[:5]}-{digits[5:]}"
