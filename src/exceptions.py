"""Rejections raised by the event registry and the ticket issuer.

Every rejection is a ``DomainError`` carrying an HTTP status code and a
stable ``code`` string, so callers can branch on the condition rather than
on the component that raised it.
"""

from http import HTTPStatus


class DomainError(Exception):
    code = 'domain_error'

    def __init__(self, message: str, status_code: int = HTTPStatus.BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotAdministrator(DomainError):
    code = 'not_administrator'

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f'{caller} is not the administrator', HTTPStatus.FORBIDDEN)


class DuplicateEvent(DomainError):
    code = 'duplicate_event'

    def __init__(self, event_id: int):
        self.event_id = event_id
        super().__init__(f'Event {event_id} already exists', HTTPStatus.CONFLICT)


class UnknownOrInactiveEvent(DomainError):
    code = 'unknown_or_inactive_event'

    def __init__(self, event_id: int):
        self.event_id = event_id
        super().__init__(
            f'Event {event_id} does not exist or is not active', HTTPStatus.NOT_FOUND
        )


class NotTokenOwner(DomainError):
    code = 'not_token_owner'

    def __init__(self, caller: str, token_id: int):
        self.caller = caller
        self.token_id = token_id
        super().__init__(f'{caller} does not own token {token_id}', HTTPStatus.FORBIDDEN)


class InsufficientPayment(DomainError):
    code = 'insufficient_payment'

    def __init__(self, paid: int, price: int):
        self.paid = paid
        self.price = price
        super().__init__(
            f'Paid {paid} but the event price is {price}', HTTPStatus.PAYMENT_REQUIRED
        )


class EventFull(DomainError):
    code = 'event_full'

    def __init__(self, event_id: int):
        self.event_id = event_id
        super().__init__(f'Event {event_id} is full', HTTPStatus.CONFLICT)


class AlreadyAdmitted(DomainError):
    code = 'already_admitted'

    def __init__(self, event_id: int, participant: str):
        self.event_id = event_id
        self.participant = participant
        super().__init__(
            f'{participant} has already been admitted to event {event_id}',
            HTTPStatus.CONFLICT,
        )


class AlreadyInactive(DomainError):
    code = 'already_inactive'

    def __init__(self, event_id: int):
        self.event_id = event_id
        super().__init__(f'Event {event_id} is already inactive', HTTPStatus.CONFLICT)


class SupplyExhausted(DomainError):
    code = 'supply_exhausted'

    def __init__(self, max_supply: int):
        self.max_supply = max_supply
        super().__init__(
            f'All {max_supply} tickets have been minted', HTTPStatus.CONFLICT
        )


class UnknownToken(DomainError):
    code = 'unknown_token'

    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f'Token {token_id} has not been minted', HTTPStatus.NOT_FOUND)
