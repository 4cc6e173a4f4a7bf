from typing import List

import attrs


def _validate_positive(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise ValueError(f'Seat layout {attribute.name} must be at least 1')


@attrs.frozen
class SeatSection:
    """Named block of rows sharing one price multiplier"""

    name: str
    rows: List[str] = attrs.field(factory=list)
    price_multiplier: float = 1.0

    def covers(self, row: str) -> bool:
        return row in self.rows

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'rows': list(self.rows),
            'price_multiplier': self.price_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SeatSection':
        return cls(
            name=data['name'],
            rows=list(data.get('rows') or []),
            price_multiplier=float(data.get('price_multiplier', 1.0)),
        )


@attrs.frozen
class SeatLayout:
    rows: int = attrs.field(validator=_validate_positive)
    seats_per_row: int = attrs.field(validator=_validate_positive)
    sections: List[SeatSection] = attrs.field(factory=list)

    @property
    def capacity(self) -> int:
        return self.rows * self.seats_per_row

    def section_for(self, row: str) -> SeatSection | None:
        for section in self.sections:
            if section.covers(row):
                return section
        return None

    def to_dict(self) -> dict:
        return {
            'rows': self.rows,
            'seats_per_row': self.seats_per_row,
            'sections': [section.to_dict() for section in self.sections],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SeatLayout':
        return cls(
            rows=int(data['rows']),
            seats_per_row=int(data['seats_per_row']),
            sections=[SeatSection.from_dict(s) for s in data.get('sections') or []],
        )
