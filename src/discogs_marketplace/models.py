"""
Data models for Discogs marketplace responses
"""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional

from .transport import DecodeError


def _expect_object(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise DecodeError(f"{what}: expected a JSON object, got {type(data).__name__}")
    return data


def _str(data: dict, key: str, what: str) -> str:
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise DecodeError(f"{what}.{key}: expected a string, got {type(value).__name__}")
    return value


def _int(data: dict, key: str, what: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{what}.{key}: expected an integer, got {type(value).__name__}")
    return value


def _bool(data: dict, key: str, what: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"{what}.{key}: expected a boolean, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Price:
    """A monetary amount in a given currency"""
    currency: str = ''
    value: Decimal = Decimal('0')

    @classmethod
    def from_dict(cls, data: Any) -> 'Price':
        data = _expect_object(data, 'price')
        raw = data.get('value')
        if raw is None:
            value = Decimal('0')
        elif isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
            raise DecodeError(f"price.value: expected a number, got {type(raw).__name__}")
        else:
            try:
                # str() first so a float 9.99 becomes Decimal('9.99')
                value = Decimal(str(raw))
            except InvalidOperation as e:
                raise DecodeError(f"price.value: {raw!r} is not a number") from e
            if not value.is_finite():
                raise DecodeError(f"price.value: {raw!r} is not a finite number")
        return cls(currency=_str(data, 'currency', 'price'), value=value)

    def to_dict(self) -> Dict[str, Any]:
        return {'currency': self.currency, 'value': float(self.value)}


@dataclass(frozen=True)
class Listing:
    """A single seller's offer for a release"""
    id: int
    title: str = ''
    status: str = ''
    price: Price = field(default_factory=Price)
    condition: str = ''
    sleeve_condition: str = ''
    ships_from: str = ''
    comments: str = ''
    location: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'Listing':
        data = _expect_object(data, 'listing')
        price = data.get('price')
        return cls(
            id=_int(data, 'id', 'listing'),
            title=_str(data, 'title', 'listing'),
            status=_str(data, 'status', 'listing'),
            price=Price.from_dict(price) if price is not None else Price(),
            condition=_str(data, 'condition', 'listing'),
            sleeve_condition=_str(data, 'sleeve_condition', 'listing'),
            ships_from=_str(data, 'ships_from', 'listing'),
            comments=_str(data, 'comments', 'listing'),
            location=_str(data, 'location', 'listing'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'status': self.status,
            'price': self.price.to_dict(),
            'condition': self.condition,
            'sleeve_condition': self.sleeve_condition,
            'ships_from': self.ships_from,
            'comments': self.comments,
            'location': self.location,
        }


def _optional_listing(data: dict, key: str) -> Optional[Listing]:
    value = data.get(key)
    return Listing.from_dict(value) if value is not None else None


class Grade(Enum):
    """Grading-quality labels, valued by their wire keys"""
    MINT = 'Mint (M)'
    NEAR_MINT = 'Near Mint (NM or M-)'
    VERY_GOOD_PLUS = 'Very Good Plus (VG+)'
    VERY_GOOD = 'Very Good (VG)'
    GOOD_PLUS = 'Good Plus (G+)'
    GOOD = 'Good (G)'
    FAIR = 'Fair (F)'
    POOR = 'Poor (P)'


# dataclass field name for each grade
_GRADE_FIELDS = {
    Grade.MINT: 'mint',
    Grade.NEAR_MINT: 'near_mint',
    Grade.VERY_GOOD_PLUS: 'very_good_plus',
    Grade.VERY_GOOD: 'very_good',
    Grade.GOOD_PLUS: 'good_plus',
    Grade.GOOD: 'good',
    Grade.FAIR: 'fair',
    Grade.POOR: 'poor',
}


@dataclass(frozen=True)
class PriceListing:
    """Suggested listing per grading quality.

    The API is expected to always return a Near Mint entry, so ``near_mint``
    is a required argument. Decoding does not enforce that: a response
    without it decodes to ``near_mint=None``. Every other grade is optional
    and omitted from ``to_dict()`` when absent.
    """
    near_mint: Optional[Listing]
    mint: Optional[Listing] = None
    very_good_plus: Optional[Listing] = None
    very_good: Optional[Listing] = None
    good_plus: Optional[Listing] = None
    good: Optional[Listing] = None
    fair: Optional[Listing] = None
    poor: Optional[Listing] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'PriceListing':
        data = _expect_object(data, 'price suggestions')
        return cls(**{name: _optional_listing(data, grade.value) for grade, name in _GRADE_FIELDS.items()})

    def get(self, grade: Grade) -> Optional[Listing]:
        return getattr(self, _GRADE_FIELDS[grade])

    def grades(self) -> Dict[Grade, Listing]:
        """Present grades, best first"""
        return {grade: self.get(grade) for grade in Grade if self.get(grade) is not None}

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for grade in Grade:
            listing = self.get(grade)
            if listing is not None:
                result[grade.value] = listing.to_dict()
            elif grade is Grade.NEAR_MINT:
                result[grade.value] = None
        return result


@dataclass(frozen=True)
class Stats:
    """Marketplace summary for a release"""
    lowest_price: Optional[Listing] = None
    for_sale: int = 0
    blocked: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> 'Stats':
        data = _expect_object(data, 'stats')
        return cls(
            lowest_price=_optional_listing(data, 'lowest_price'),
            for_sale=_int(data, 'num_for_sale', 'stats'),
            blocked=_bool(data, 'blocked_from_sale', 'stats'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lowest_price': self.lowest_price.to_dict() if self.lowest_price else None,
            'num_for_sale': self.for_sale,
            'blocked_from_sale': self.blocked,
        }
