import pytest

from src.exceptions import NotAdministrator, NotTokenOwner, SupplyExhausted, UnknownToken
from src.issuer import TicketIssuer
from src.notifications import Minted
from tests.util_constant import ADMIN, ALICE, BOB, MAX_SUPPLY, METADATA_BASE


async def test_initialize_is_idempotent(issuer: TicketIssuer):
    state = await issuer.initialize(
        name='Other', symbol='OTH', max_supply=99, metadata_base='https://other/'
    )

    assert state.name == 'Event Ticket'
    assert state.symbol == 'ETK'
    assert state.max_supply == MAX_SUPPLY
    assert state.next_token_id == 1


async def test_mint_assigns_sequential_ids_until_supply_is_exhausted(
    issuer: TicketIssuer, notifications
):
    token_ids = [await issuer.mint(ADMIN, ALICE, f'{n}.json') for n in range(MAX_SUPPLY)]

    assert token_ids == [1, 2, 3]
    assert await issuer.total_minted() == MAX_SUPPLY
    assert notifications.of_type(Minted) == [
        Minted(recipient=ALICE, token_id=token_id) for token_id in token_ids
    ]

    with pytest.raises(SupplyExhausted):
        await issuer.mint(ADMIN, BOB, 'extra.json')

    assert await issuer.total_minted() == MAX_SUPPLY
    assert len(notifications.of_type(Minted)) == MAX_SUPPLY
    assert (await issuer.state()).next_token_id == MAX_SUPPLY + 1


async def test_mint_requires_administrator(issuer: TicketIssuer, notifications):
    with pytest.raises(NotAdministrator):
        await issuer.mint(ALICE, ALICE, '1.json')

    assert await issuer.total_minted() == 0
    assert notifications.notifications == []


async def test_mint_assigns_ownership(issuer: TicketIssuer):
    first = await issuer.mint(ADMIN, ALICE, 'a.json')
    second = await issuer.mint(ADMIN, BOB, 'b.json')

    assert await issuer.owner_of(first) == ALICE
    assert await issuer.owner_of(second) == BOB
    assert await issuer.balance_of(ALICE) == 1
    assert await issuer.balance_of('0xnobody') == 0


async def test_owner_of_unknown_token(issuer: TicketIssuer):
    with pytest.raises(UnknownToken):
        await issuer.owner_of(1)


async def test_resolve_metadata_uses_current_base(issuer: TicketIssuer):
    token_id = await issuer.mint(ADMIN, ALICE, '1.json')

    assert await issuer.resolve_metadata(token_id) == f'{METADATA_BASE}1.json'

    await issuer.set_metadata_base(ADMIN, 'https://cdn.example.com/v2/')

    assert await issuer.resolve_metadata(token_id) == 'https://cdn.example.com/v2/1.json'


async def test_resolve_metadata_unknown_token(issuer: TicketIssuer):
    with pytest.raises(UnknownToken):
        await issuer.resolve_metadata(5)


async def test_set_metadata_base_requires_administrator(issuer: TicketIssuer):
    with pytest.raises(NotAdministrator):
        await issuer.set_metadata_base(BOB, 'https://evil/')

    assert (await issuer.state()).metadata_base == METADATA_BASE


async def test_transfer_moves_ownership(issuer: TicketIssuer):
    token_id = await issuer.mint(ADMIN, ALICE, '1.json')

    await issuer.transfer(ALICE, token_id, BOB)

    assert await issuer.owner_of(token_id) == BOB
    assert await issuer.balance_of(ALICE) == 0
    with pytest.raises(NotTokenOwner):
        await issuer.transfer(ALICE, token_id, ALICE)


async def test_transfer_unknown_token(issuer: TicketIssuer):
    with pytest.raises(UnknownToken):
        await issuer.transfer(ALICE, 1, BOB)
