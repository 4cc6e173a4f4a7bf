from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (
        UniqueConstraint('event_id', 'row', 'seat_number', name='uq_seat_event_row_number'),
        CheckConstraint('price >= 0', name='ck_seat_price_non_negative'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('event.id', ondelete='CASCADE'), nullable=False, index=True
    )
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    row: Mapped[str] = mapped_column(String(5), nullable=False)
    section: Mapped[str] = mapped_column(String(50), nullable=False, default='General')
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[str] = mapped_column(String(20), nullable=False, default='regular')
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='available')
