from __future__ import annotations

import pytest
from support import TEST_JWT_SECRET, RecordingPublisher

from giftdesk.bootstrap import Application, bootstrap, build_event_type_registry
from giftdesk.config import Settings
from giftdesk.shared.adapters.memory import InMemoryMailer
from giftdesk.shared.domain.event_registry import EventTypeRegistry
from giftdesk.shared.events import EventSerializer
from giftdesk.shared.primitives.id_generator import SequentialIdGenerator
from giftdesk.shared.retry import RetryPolicy


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def event_types() -> EventTypeRegistry:
    return build_event_type_registry()


@pytest.fixture()
def serializer(event_types: EventTypeRegistry) -> EventSerializer:
    return EventSerializer(event_types)


@pytest.fixture()
def mailer() -> InMemoryMailer:
    return InMemoryMailer()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        database_url=None,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        mail_sender="desk@example.com",
    )


@pytest.fixture()
def app(settings: Settings, mailer: InMemoryMailer) -> Application:
    return bootstrap(
        settings,
        mailer=mailer,
        id_generator=SequentialIdGenerator(),
        retry_policy=RetryPolicy(max_attempts=2, base_delay=0, max_delay=0, jitter=False),
    )
