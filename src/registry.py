"""Event registry: admits ticket holders to events, once each, up to capacity."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.exceptions import (
    AlreadyAdmitted,
    AlreadyInactive,
    DuplicateEvent,
    EventFull,
    InsufficientPayment,
    NotAdministrator,
    NotTokenOwner,
    UnknownOrInactiveEvent,
)
from src.logger_config import get_logger
from src.models import Admission, Event, Payout, Treasury
from src.notifications import Admitted, LoggingNotificationSink, NotificationSink, Withdrawn
from src.oracle import OwnershipOracle

logger = get_logger('registry')


class EventRegistry:
    """Gated, deduplicated, capacity-bounded admission to events.

    Fees from every event accumulate in one pooled treasury balance that
    only the administrator can withdraw.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        oracle: OwnershipOracle,
        administrator: str,
        notifications: NotificationSink | None = None,
    ):
        self.session_factory = session_factory
        self.oracle = oracle
        self.administrator = administrator
        self.notifications = notifications or LoggingNotificationSink()

    def _require_administrator(self, caller: str) -> None:
        if caller != self.administrator:
            raise NotAdministrator(caller)

    @staticmethod
    async def _active_event(
        session: AsyncSession, event_id: int, for_update: bool = False
    ) -> Event:
        stm = select(Event).where(Event.id == event_id, Event.active == True)  # noqa: E712
        if for_update:
            stm = stm.with_for_update()
        event = await session.scalar(stm)
        if event is None:
            raise UnknownOrInactiveEvent(event_id)
        return event

    @staticmethod
    async def _treasury(session: AsyncSession) -> Treasury:
        treasury = await session.scalar(
            select(Treasury).order_by(Treasury.id).limit(1).with_for_update()
        )
        if treasury is None:
            raise RuntimeError('Event registry has not been initialized')
        return treasury

    async def initialize(self) -> None:
        async with self.session_factory() as session, session.begin():
            if await session.scalar(select(Treasury).limit(1)) is None:
                session.add(Treasury())

    async def create_event(
        self,
        caller: str,
        event_id: int,
        name: str,
        scheduled_at: datetime,
        price: int,
        capacity: int,
    ) -> Event:
        self._require_administrator(caller)

        async with self.session_factory() as session, session.begin():
            event = await session.get(Event, event_id, with_for_update=True)
            if event is not None and event.active:
                raise DuplicateEvent(event_id)

            if event is None:
                event = Event(
                    id=event_id,
                    name=name,
                    scheduled_at=scheduled_at,
                    price=price,
                    capacity=capacity,
                )
                session.add(event)
            else:
                # A deactivated id is re-initialised; its admissions are kept.
                event.name = name
                event.scheduled_at = scheduled_at
                event.price = price
                event.capacity = capacity
                event.admitted_count = 0
                event.active = True

        logger.info(f'Created event {event_id} {name!r} (price={price}, capacity={capacity})')
        return event

    async def admit(self, caller: str, event_id: int, token_id: int, paid_amount: int) -> Event:
        """Admit ``caller`` to an event on the strength of holding ``token_id``.

        Guards run in a fixed order so the reported rejection is
        deterministic: existence, ownership, payment, duplicate, capacity.
        A repeat caller is always told it was already admitted, even once the
        event is full.
        Nothing is written until all of them pass.
        """
        async with self.session_factory() as session, session.begin():
            event = await self._active_event(session, event_id, for_update=True)

            owner = await self.oracle.owner_of(token_id)
            if owner != caller:
                raise NotTokenOwner(caller, token_id)

            if paid_amount < event.price:
                raise InsufficientPayment(paid_amount, event.price)

            if await session.get(Admission, (event_id, caller)) is not None:
                raise AlreadyAdmitted(event_id, caller)

            if event.admitted_count >= event.capacity:
                raise EventFull(event_id)

            stm = (
                update(Event)
                .where(
                    Event.id == event_id,
                    Event.active == True,  # noqa: E712
                    Event.admitted_count < Event.capacity,
                )
                .values(admitted_count=Event.admitted_count + 1)
            )
            result = await session.execute(stm)
            if result.rowcount == 0:
                raise EventFull(event_id)

            session.add(
                Admission(
                    event_id=event_id,
                    participant=caller,
                    token_id=token_id,
                    paid_amount=paid_amount,
                )
            )
            treasury = await self._treasury(session)
            treasury.balance += paid_amount
            await session.refresh(event)

        logger.info(
            f'Admitted {caller} to event {event_id} '
            f'({event.admitted_count}/{event.capacity})'
        )
        self.notifications.emit(
            Admitted(participant=caller, event_id=event_id, event_name=event.name)
        )
        return event

    async def deactivate(self, caller: str, event_id: int) -> None:
        self._require_administrator(caller)

        async with self.session_factory() as session, session.begin():
            event = await session.get(Event, event_id, with_for_update=True)
            if event is None:
                raise UnknownOrInactiveEvent(event_id)
            if not event.active:
                raise AlreadyInactive(event_id)
            event.active = False

        logger.info(f'Deactivated event {event_id}')

    async def withdraw(self, caller: str) -> Payout:
        """Transfer the whole pooled balance to the administrator."""
        self._require_administrator(caller)

        async with self.session_factory() as session, session.begin():
            treasury = await self._treasury(session)
            payout = Payout(recipient=self.administrator, amount=treasury.balance)
            treasury.balance = 0
            session.add(payout)

        logger.info(f'Withdrew {payout.amount} to {payout.recipient}')
        self.notifications.emit(Withdrawn(recipient=payout.recipient, amount=payout.amount))
        return payout

    async def get_event(self, event_id: int) -> Event:
        async with self.session_factory() as session, session.begin():
            return await self._active_event(session, event_id)

    async def has_attended(self, event_id: int, participant: str) -> bool:
        async with self.session_factory() as session, session.begin():
            return await session.get(Admission, (event_id, participant)) is not None

    async def balance(self) -> int:
        async with self.session_factory() as session, session.begin():
            treasury = await session.scalar(select(Treasury).order_by(Treasury.id).limit(1))
            return treasury.balance if treasury else 0
