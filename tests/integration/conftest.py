from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from giftdesk.bootstrap import Application, bootstrap
from giftdesk.config import Settings
from giftdesk.shared.adapters.memory import InMemoryMailer
from giftdesk.shared.primitives.id_generator import SequentialIdGenerator
from giftdesk.shared.retry import RetryPolicy

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture()
async def sql_app(
    settings: Settings, mailer: InMemoryMailer
) -> AsyncIterator[Application]:
    app = bootstrap(
        settings.model_copy(update={"database_url": SQLITE_MEMORY_URL}),
        mailer=mailer,
        id_generator=SequentialIdGenerator(),
        retry_policy=RetryPolicy(max_attempts=2, base_delay=0, max_delay=0, jitter=False),
    )
    await app.init_schema()
    yield app
    await app.dispose()
