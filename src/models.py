from datetime import datetime

from sqlalchemy import ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, registry

table_register = registry()


@table_register.mapped_as_dataclass
class Event:
    __tablename__ = 'events'

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str]
    scheduled_at: Mapped[datetime]
    price: Mapped[int]
    capacity: Mapped[int]
    admitted_count: Mapped[int] = mapped_column(default=0)
    active: Mapped[bool] = mapped_column(default=True)


@table_register.mapped_as_dataclass
class Admission:
    __tablename__ = 'admissions'

    event_id: Mapped[int] = mapped_column(ForeignKey('events.id'), primary_key=True)
    participant: Mapped[str] = mapped_column(primary_key=True)
    token_id: Mapped[int]
    paid_amount: Mapped[int]
    admitted_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now())


@table_register.mapped_as_dataclass
class Ticket:
    __tablename__ = 'tickets'

    token_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    owner: Mapped[str] = mapped_column(index=True)
    metadata_ref: Mapped[str]


@table_register.mapped_as_dataclass
class IssuerState:
    __tablename__ = 'issuer_state'

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str]
    symbol: Mapped[str]
    max_supply: Mapped[int]
    metadata_base: Mapped[str]
    next_token_id: Mapped[int] = mapped_column(default=1)


@table_register.mapped_as_dataclass
class Treasury:
    __tablename__ = 'treasury'

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    balance: Mapped[int] = mapped_column(default=0)


@table_register.mapped_as_dataclass
class Payout:
    __tablename__ = 'payouts'

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    recipient: Mapped[str]
    amount: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now())
