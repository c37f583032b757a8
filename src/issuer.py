"""Ticket issuer: mints sequentially numbered tickets up to a fixed supply."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.exceptions import NotAdministrator, NotTokenOwner, SupplyExhausted, UnknownToken
from src.logger_config import get_logger
from src.models import IssuerState, Ticket
from src.notifications import LoggingNotificationSink, Minted, NotificationSink

logger = get_logger('issuer')


class TicketIssuer:
    """Owns the ticket collection and answers ownership queries about it.

    Every public operation runs in its own transaction. Notifications are
    emitted only once that transaction has committed.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        administrator: str,
        notifications: NotificationSink | None = None,
    ):
        self.session_factory = session_factory
        self.administrator = administrator
        self.notifications = notifications or LoggingNotificationSink()

    def _require_administrator(self, caller: str) -> None:
        if caller != self.administrator:
            raise NotAdministrator(caller)

    @staticmethod
    async def _state(session: AsyncSession, for_update: bool = False) -> IssuerState:
        stm = select(IssuerState).order_by(IssuerState.id).limit(1)
        if for_update:
            stm = stm.with_for_update()
        state = await session.scalar(stm)
        if state is None:
            raise RuntimeError('Ticket issuer has not been initialized')
        return state

    @staticmethod
    async def _ticket(session: AsyncSession, token_id: int) -> Ticket:
        ticket = await session.get(Ticket, token_id)
        if ticket is None:
            raise UnknownToken(token_id)
        return ticket

    async def initialize(
        self, name: str, symbol: str, max_supply: int, metadata_base: str
    ) -> IssuerState:
        """Seed the collection state once; later calls return the stored state."""
        async with self.session_factory() as session, session.begin():
            state = await session.scalar(select(IssuerState).limit(1))
            if state is None:
                state = IssuerState(
                    name=name,
                    symbol=symbol,
                    max_supply=max_supply,
                    metadata_base=metadata_base,
                )
                session.add(state)
                logger.info(f'Initialized {name} ({symbol}) with max supply {max_supply}')
        return state

    async def mint(self, caller: str, recipient: str, metadata_ref: str) -> int:
        self._require_administrator(caller)

        async with self.session_factory() as session, session.begin():
            state = await self._state(session, for_update=True)
            if state.next_token_id > state.max_supply:
                logger.warning(f'Mint to {recipient} rejected, supply exhausted')
                raise SupplyExhausted(state.max_supply)

            token_id = state.next_token_id
            session.add(Ticket(token_id=token_id, owner=recipient, metadata_ref=metadata_ref))
            state.next_token_id = token_id + 1

        logger.info(f'Minted token {token_id} to {recipient}')
        self.notifications.emit(Minted(recipient=recipient, token_id=token_id))
        return token_id

    async def set_metadata_base(self, caller: str, ref: str) -> None:
        self._require_administrator(caller)

        async with self.session_factory() as session, session.begin():
            state = await self._state(session, for_update=True)
            state.metadata_base = ref

        logger.info(f'Metadata base set to {ref!r}')

    async def resolve_metadata(self, token_id: int) -> str:
        async with self.session_factory() as session, session.begin():
            ticket = await self._ticket(session, token_id)
            state = await self._state(session)
            return state.metadata_base + ticket.metadata_ref

    async def owner_of(self, token_id: int) -> str:
        async with self.session_factory() as session, session.begin():
            ticket = await self._ticket(session, token_id)
            return ticket.owner

    async def transfer(self, caller: str, token_id: int, recipient: str) -> None:
        async with self.session_factory() as session, session.begin():
            ticket = await self._ticket(session, token_id)
            if ticket.owner != caller:
                raise NotTokenOwner(caller, token_id)
            ticket.owner = recipient

        logger.info(f'Token {token_id} transferred from {caller} to {recipient}')

    async def balance_of(self, identity: str) -> int:
        async with self.session_factory() as session, session.begin():
            return await session.scalar(
                select(func.count()).select_from(Ticket).where(Ticket.owner == identity)
            )

    async def total_minted(self) -> int:
        async with self.session_factory() as session, session.begin():
            state = await self._state(session)
            return state.next_token_id - 1

    async def state(self) -> IssuerState:
        async with self.session_factory() as session, session.begin():
            return await self._state(session)
