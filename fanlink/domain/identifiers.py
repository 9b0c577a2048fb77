"""Release and recording identifier formats (UPC, ISRC)."""

import re

from attrs import define, field, validators

ISRC_PATTERN = re.compile(r"^[A-Z]{2}[A-Z0-9]{3}\d{7}$", re.IGNORECASE)


@define(frozen=True, slots=True)
class UpcBounds:
    """Inclusive digit-length bounds for a UPC/EAN barcode."""

    min_digits: int = field(validator=validators.ge(1))
    max_digits: int = field()

    @max_digits.validator
    def _check_max(self, _attribute, value: int) -> None:
        if value < self.min_digits:
            raise ValueError(
                f"max_digits ({value}) must be >= min_digits ({self.min_digits})"
            )

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(rf"^\d{{{self.min_digits},{self.max_digits}}}$")

    def matches(self, value: str) -> bool:
        return bool(self.pattern.fullmatch(value))


# Strict UPC-A / EAN-13 range
EAN13_UPC_BOUNDS = UpcBounds(12, 13)
# Also admits 14-digit GTINs; the default for every flow
GTIN_UPC_BOUNDS = UpcBounds(12, 14)


def is_isrc(value: str) -> bool:
    return bool(ISRC_PATTERN.match(value.strip()))


def normalize_isrc(value: str | None) -> str | None:
    """Uppercase a well-formed ISRC, dropping anything malformed."""
    if not value:
        return None
    candidate = value.strip().replace("-", "").upper()
    return candidate if ISRC_PATTERN.match(candidate) else None


def normalize_upc(value: str | None) -> str | None:
    """Return the trimmed UPC when it is 12-14 digits, otherwise None."""
    if not value:
        return None
    candidate = str(value).strip()
    return candidate if GTIN_UPC_BOUNDS.matches(candidate) else None
