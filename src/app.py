from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Annotated

from fastapi import Depends, FastAPI, Header

from src.database import AsyncSessionLocal, engine
from src.exception_handlers import register_exception_handlers
from src.issuer import TicketIssuer
from src.logger_config import get_logger
from src.models import table_register
from src.registry import EventRegistry
from src.schemas import (
    AdmitRequest,
    AttendanceResponse,
    EventRequestCreate,
    EventResponse,
    IssuerResponse,
    MetadataBaseRequest,
    MetadataResponse,
    MintRequest,
    MintResponse,
    OwnerResponse,
    PayoutResponse,
    TransferRequest,
    TreasuryResponse,
)
from src.settings import settings

logger = get_logger('app')

ticket_issuer = TicketIssuer(AsyncSessionLocal, settings.ADMINISTRATOR)
event_registry = EventRegistry(AsyncSessionLocal, ticket_issuer, settings.ADMINISTRATOR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(table_register.metadata.create_all)
    await ticket_issuer.initialize(
        name=settings.TICKET_NAME,
        symbol=settings.TICKET_SYMBOL,
        max_supply=settings.TICKET_MAX_SUPPLY,
        metadata_base=settings.TICKET_METADATA_BASE,
    )
    await event_registry.initialize()
    logger.info(f'{settings.PROJECT_NAME} {settings.VERSION} started')
    yield
    await engine.dispose()


app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)
register_exception_handlers(app)


def get_registry() -> EventRegistry:
    return event_registry


def get_issuer() -> TicketIssuer:
    return ticket_issuer


RegistryDep = Annotated[EventRegistry, Depends(get_registry)]
IssuerDep = Annotated[TicketIssuer, Depends(get_issuer)]
CallerDep = Annotated[str, Header(alias='X-Caller')]


@app.post('/events', response_model=EventResponse, status_code=HTTPStatus.CREATED)
async def create_event(registry: RegistryDep, caller: CallerDep, event_in: EventRequestCreate):
    return await registry.create_event(
        caller,
        event_in.id,
        event_in.name,
        event_in.scheduled_at,
        event_in.price,
        event_in.capacity,
    )


@app.get('/events/{event_id}', response_model=EventResponse)
async def get_event(registry: RegistryDep, event_id: int):
    return await registry.get_event(event_id)


@app.post('/events/{event_id}/admit', response_model=EventResponse)
async def admit(registry: RegistryDep, caller: CallerDep, event_id: int, admit_in: AdmitRequest):
    return await registry.admit(caller, event_id, admit_in.token_id, admit_in.paid_amount)


@app.post('/events/{event_id}/deactivate', status_code=HTTPStatus.NO_CONTENT)
async def deactivate(registry: RegistryDep, caller: CallerDep, event_id: int):
    await registry.deactivate(caller, event_id)


@app.get('/events/{event_id}/attendees/{participant}', response_model=AttendanceResponse)
async def has_attended(registry: RegistryDep, event_id: int, participant: str):
    attended = await registry.has_attended(event_id, participant)
    return {'event_id': event_id, 'participant': participant, 'attended': attended}


@app.get('/treasury', response_model=TreasuryResponse)
async def get_treasury(registry: RegistryDep):
    return {'balance': await registry.balance()}


@app.post('/treasury/withdraw', response_model=PayoutResponse)
async def withdraw(registry: RegistryDep, caller: CallerDep):
    return await registry.withdraw(caller)


@app.get('/tickets/issuer', response_model=IssuerResponse)
async def get_issuer_state(issuer: IssuerDep):
    return await issuer.state()


@app.post('/tickets/mint', response_model=MintResponse, status_code=HTTPStatus.CREATED)
async def mint(issuer: IssuerDep, caller: CallerDep, mint_in: MintRequest):
    token_id = await issuer.mint(caller, mint_in.recipient, mint_in.metadata_ref)
    return {'token_id': token_id, 'recipient': mint_in.recipient}


@app.put('/tickets/metadata-base', status_code=HTTPStatus.NO_CONTENT)
async def set_metadata_base(issuer: IssuerDep, caller: CallerDep, base_in: MetadataBaseRequest):
    await issuer.set_metadata_base(caller, base_in.metadata_base)


@app.get('/tickets/{token_id}/metadata', response_model=MetadataResponse)
async def resolve_metadata(issuer: IssuerDep, token_id: int):
    return {'token_id': token_id, 'metadata': await issuer.resolve_metadata(token_id)}


@app.get('/tickets/{token_id}/owner', response_model=OwnerResponse)
async def owner_of(issuer: IssuerDep, token_id: int):
    return {'token_id': token_id, 'owner': await issuer.owner_of(token_id)}


@app.post('/tickets/{token_id}/transfer', status_code=HTTPStatus.NO_CONTENT)
async def transfer(
    issuer: IssuerDep, caller: CallerDep, token_id: int, transfer_in: TransferRequest
):
    await issuer.transfer(caller, token_id, transfer_in.recipient)
