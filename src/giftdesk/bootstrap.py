"""
Composition root: builds every adapter, handler and subscriber once.

Usage:
    app = bootstrap(Settings.from_env())
    await app.init_schema()
    response = await app.mediator.send(AttributeGift(resident_id=..., gift_id=...))
    await app.task_queue.drain()
    await app.dispose()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from .attribution.application import (
    AttributeGift,
    AttributeGiftHandler,
    AutomaticGiftAttributionService,
    CountResidentAttributions,
    CountResidentAttributionsHandler,
    GenerateGiftCertificate,
    GenerateGiftCertificateHandler,
    GetResident,
    GetResidentHandler,
    GetStatistics,
    GetStatisticsHandler,
    GiftAttributedSubscriber,
    GiftAvailabilityValidator,
    ListGifts,
    ListGiftsHandler,
    ListResidents,
    ListResidentsHandler,
)
from .attribution.domain import GiftAttributed
from .attribution.infrastructure import (
    InMemoryAttributionRepository,
    InMemoryGiftRepository,
    InMemoryResidentRepository,
    SQLAlchemyAttributionRepository,
    SQLAlchemyGiftRepository,
    SQLAlchemyResidentRepository,
)
from .config import Settings
from .gift_request.application import (
    GiftRequestSubmittedSubscriber,
    GiftRequestValidator,
    ListGiftRequests,
    ListGiftRequestsHandler,
    SubmitGiftRequest,
    SubmitGiftRequestHandler,
)
from .gift_request.domain import GiftRequestSubmitted
from .gift_request.infrastructure import (
    InMemoryGiftRequestRepository,
    SQLAlchemyGiftRequestRepository,
)
from .security.application import (
    GetCurrentUser,
    GetCurrentUserHandler,
    Login,
    LoginHandler,
    RegisterUser,
    RegisterUserHandler,
    UserRegisteredSubscriber,
    authenticate_bearer,
)
from .security.domain import UserRegistered
from .security.infrastructure import (
    BcryptPasswordHasher,
    InMemoryUserRepository,
    JwtTokenGenerator,
    SQLAlchemyUserRepository,
)
from .shared.adapters.memory import (
    InMemoryEventStore,
    InMemoryTaskQueue,
    InMemoryUnitOfWork,
    LoggingMailer,
)
from .shared.adapters.sqlalchemy import Base, SQLAlchemyEventStore, SQLAlchemyUnitOfWork
from .shared.cqrs import HandlerRegistry, Mediator
from .shared.domain.event_registry import EventTypeRegistry
from .shared.events import (
    DomainEventHarvester,
    EventSerializer,
    InProcessEventPublisher,
    StoringEventPublisher,
)
from .shared.middleware import LoggingMiddleware, ValidatorMiddleware
from .shared.primitives.id_generator import UUID4Generator
from .shared.validation import CompositeValidator

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from sqlalchemy.ext.asyncio import AsyncEngine

    from .security.domain import User
    from .shared.ports.event_store import IEventStore
    from .shared.ports.mailer import IMailer
    from .shared.ports.unit_of_work import UnitOfWork
    from .shared.primitives.id_generator import IIDGenerator
    from .shared.retry import RetryPolicy

logger = logging.getLogger(__name__)

EVENT_TYPES: dict[str, Any] = {
    "gift.attributed": GiftAttributed,
    "gift_request.submitted": GiftRequestSubmitted,
    "user.registered": UserRegistered,
}


@dataclass
class Repositories:
    residents: Any
    gifts: Any
    attributions: Any
    gift_requests: Any
    users: Any


@dataclass
class Application:
    """Everything :func:`bootstrap` wired, ready to use."""

    settings: Settings
    mediator: Mediator
    registry: HandlerRegistry
    event_types: EventTypeRegistry
    event_store: IEventStore
    subscribers: InProcessEventPublisher
    publisher: StoringEventPublisher
    harvester: DomainEventHarvester
    uow_factory: Callable[[], UnitOfWork]
    repositories: Repositories
    mailer: IMailer
    task_queue: InMemoryTaskQueue
    password_hasher: BcryptPasswordHasher
    token_generator: JwtTokenGenerator
    attribution_service: AutomaticGiftAttributionService
    engine: AsyncEngine | None = None
    handlers: dict[type[Any], Any] = field(default_factory=dict)

    async def init_schema(self) -> None:
        """Create every table (no-op for the in-memory profile)."""
        if self.engine is None:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.task_queue.stop()
        if self.engine is not None:
            await self.engine.dispose()

    async def authenticate(self, headers: Mapping[str, str]) -> User:
        """Resolve the user of an ``Authorization: Bearer`` header."""
        async with self.uow_factory() as uow:
            return await authenticate_bearer(
                headers, self.token_generator, self.repositories.users, uow
            )


def build_event_type_registry() -> EventTypeRegistry:
    registry = EventTypeRegistry()
    for name, event_class in EVENT_TYPES.items():
        registry.register(name, event_class)
    return registry


def _create_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite") and ":memory:" in url:
        # One shared connection, otherwise every session sees an empty database
        return create_async_engine(
            url, poolclass=StaticPool, connect_args={"check_same_thread": False}
        )
    return create_async_engine(url)


def bootstrap(
    settings: Settings | None = None,
    *,
    mailer: IMailer | None = None,
    id_generator: IIDGenerator | None = None,
    retry_policy: RetryPolicy | None = None,
) -> Application:
    """Wire the application for *settings*.

    ``settings.database_url`` selects SQLAlchemy repositories and event store;
    without it everything lives in memory. *mailer*, *id_generator* and
    *retry_policy* replace the defaults, mostly for tests.
    """
    settings = settings or Settings()
    ids = id_generator or UUID4Generator()
    mailer = mailer or LoggingMailer(default_sender=settings.mail_sender)

    event_types = build_event_type_registry()
    serializer = EventSerializer(event_types)

    engine: AsyncEngine | None = None
    if settings.database_url:
        engine = _create_engine(settings.database_url)
        session_factory = async_sessionmaker(engine, expire_on_commit=False)
        event_store: IEventStore = SQLAlchemyEventStore(session_factory, serializer)
        repositories = Repositories(
            residents=SQLAlchemyResidentRepository(),
            gifts=SQLAlchemyGiftRepository(),
            attributions=SQLAlchemyAttributionRepository(),
            gift_requests=SQLAlchemyGiftRequestRepository(),
            users=SQLAlchemyUserRepository(),
        )
    else:
        event_store = InMemoryEventStore(serializer)
        repositories = Repositories(
            residents=InMemoryResidentRepository(),
            gifts=InMemoryGiftRepository(),
            attributions=InMemoryAttributionRepository(),
            gift_requests=InMemoryGiftRequestRepository(),
            users=InMemoryUserRepository(),
        )

    subscribers = InProcessEventPublisher()
    publisher = StoringEventPublisher(subscribers, event_store)
    harvester = DomainEventHarvester(publisher)

    if engine is not None:

        def uow_factory() -> UnitOfWork:
            return SQLAlchemyUnitOfWork(
                session_factory=session_factory, commit_listeners=[harvester]
            )

    else:

        def uow_factory() -> UnitOfWork:
            return InMemoryUnitOfWork(commit_listeners=[harvester])

    # ── Background tasks ─────────────────────────────────────────
    task_queue = InMemoryTaskQueue(retry_policy)
    task_queue.register(
        GenerateGiftCertificate,
        GenerateGiftCertificateHandler(mailer, sender=settings.mail_sender),
    )

    # ── Subscribers ──────────────────────────────────────────────
    subscribers.subscribe(
        GiftAttributed,
        GiftAttributedSubscriber(mailer, task_queue, sender=settings.mail_sender),
    )
    subscribers.subscribe(
        GiftRequestSubmitted,
        GiftRequestSubmittedSubscriber(mailer, sender=settings.mail_sender),
    )
    subscribers.subscribe(UserRegistered, UserRegisteredSubscriber())

    # ── Handlers ─────────────────────────────────────────────────
    hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = JwtTokenGenerator(
        settings.jwt_secret, settings.jwt_issuer, settings.jwt_ttl_seconds
    )
    r = repositories
    command_handlers: dict[type[Any], Any] = {
        AttributeGift: AttributeGiftHandler(r.residents, r.gifts, r.attributions, ids),
        SubmitGiftRequest: SubmitGiftRequestHandler(r.gift_requests, ids),
        RegisterUser: RegisterUserHandler(r.users, hasher, ids),
        Login: LoginHandler(r.users, hasher, tokens),
    }
    query_handlers: dict[type[Any], Any] = {
        ListGifts: ListGiftsHandler(r.gifts),
        ListResidents: ListResidentsHandler(r.residents),
        GetResident: GetResidentHandler(r.residents),
        GetStatistics: GetStatisticsHandler(r.residents, r.gifts, r.attributions),
        CountResidentAttributions: CountResidentAttributionsHandler(r.attributions),
        ListGiftRequests: ListGiftRequestsHandler(r.gift_requests),
        GetCurrentUser: GetCurrentUserHandler(r.users),
    }

    registry = HandlerRegistry()
    instances: dict[type[Any], Any] = {}
    for message_type, handler in command_handlers.items():
        registry.register_command_handler(message_type, type(handler))
        instances[type(handler)] = handler
    for message_type, handler in query_handlers.items():
        registry.register_query_handler(message_type, type(handler))
        instances[type(handler)] = handler

    validator = CompositeValidator()
    validator.add(GiftAvailabilityValidator(r.residents, r.gifts), AttributeGift)
    validator.add(GiftRequestValidator(), SubmitGiftRequest)
    mediator = Mediator(
        registry,
        uow_factory,
        middlewares=[LoggingMiddleware(), ValidatorMiddleware(validator)],
        handler_factory=instances.__getitem__,
    )

    logger.info(
        "giftdesk bootstrapped (%s persistence, %d command and %d query handlers)",
        "sqlalchemy" if engine is not None else "in-memory",
        len(command_handlers),
        len(query_handlers),
    )

    return Application(
        settings=settings,
        mediator=mediator,
        registry=registry,
        event_types=event_types,
        event_store=event_store,
        subscribers=subscribers,
        publisher=publisher,
        harvester=harvester,
        uow_factory=uow_factory,
        repositories=repositories,
        mailer=mailer,
        task_queue=task_queue,
        password_hasher=hasher,
        token_generator=tokens,
        attribution_service=AutomaticGiftAttributionService(
            mediator, max_gifts_per_year=settings.max_gifts_per_year
        ),
        engine=engine,
        handlers=instances,
    )
