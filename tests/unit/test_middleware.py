import logging
from unittest.mock import AsyncMock

import pytest

from giftdesk.shared.cqrs.command import Command
from giftdesk.shared.cqrs.response import CommandResponse
from giftdesk.shared.middleware import (
    LoggingMiddleware,
    ValidatorMiddleware,
    build_pipeline,
)
from giftdesk.shared.ports.validation import IValidator
from giftdesk.shared.primitives.exceptions import ValidationError
from giftdesk.shared.validation import CompositeValidator, ValidationResult

# --- Test Models ---


class MyCommand(Command):
    data: str


class RejectBlank:
    async def validate(self, command: Command) -> ValidationResult:
        if isinstance(command, MyCommand) and not command.data:
            return ValidationResult.failure({"data": ["Data is required"]})
        return ValidationResult.success()


class RejectShort:
    async def validate(self, command: Command) -> ValidationResult:
        result = ValidationResult.success()
        if isinstance(command, MyCommand) and len(command.data) < 3:
            result.add_error("data", "Data is too short")
        return result


# --- LoggingMiddleware Tests ---


@pytest.mark.asyncio()
async def test_logging_middleware_logs_execution(caplog) -> None:
    caplog.set_level(logging.INFO)
    middleware = LoggingMiddleware()
    command = MyCommand(data="test")
    next_fn = AsyncMock(return_value=CommandResponse(result="ok"))

    result = await middleware(command, next_fn)

    assert result.result == "ok"
    assert "Handling MyCommand" in caplog.text
    assert "MyCommand completed in" in caplog.text


@pytest.mark.asyncio()
async def test_logging_middleware_logs_exception(caplog) -> None:
    caplog.set_level(logging.INFO)
    middleware = LoggingMiddleware()
    command = MyCommand(data="test")
    next_fn = AsyncMock(side_effect=ValueError("boom"))

    with pytest.raises(ValueError, match="boom"):
        await middleware(command, next_fn)

    assert "MyCommand failed after" in caplog.text


# --- ValidatorMiddleware Tests ---


@pytest.mark.asyncio()
async def test_validator_middleware_passes_valid_command() -> None:
    middleware = ValidatorMiddleware(RejectBlank())
    next_fn = AsyncMock(return_value=CommandResponse(result="ok"))

    await middleware(MyCommand(data="fine"), next_fn)

    next_fn.assert_awaited_once()


@pytest.mark.asyncio()
async def test_validator_middleware_blocks_invalid_command() -> None:
    middleware = ValidatorMiddleware(RejectBlank())
    next_fn = AsyncMock()

    with pytest.raises(ValidationError) as exc_info:
        await middleware(MyCommand(data=""), next_fn)

    assert exc_info.value.errors == {"data": ["Data is required"]}
    next_fn.assert_not_called()


def test_validators_satisfy_the_port() -> None:
    assert isinstance(RejectBlank(), IValidator)
    assert isinstance(CompositeValidator(), IValidator)


# --- CompositeValidator / ValidationResult ---


@pytest.mark.asyncio()
async def test_composite_collects_every_error() -> None:
    composite = CompositeValidator([RejectBlank()])
    composite.add(RejectShort())

    result = await composite.validate(MyCommand(data=""))

    assert not result.is_valid
    assert result.errors == {"data": ["Data is required", "Data is too short"]}


@pytest.mark.asyncio()
async def test_empty_composite_accepts_everything() -> None:
    assert await CompositeValidator().validate(MyCommand(data=""))


def test_merge_does_not_mutate_inputs() -> None:
    left = ValidationResult.failure({"a": ["one"]})
    right = ValidationResult.failure({"a": ["two"], "b": ["three"]})

    merged = left.merge(right)

    assert merged.errors == {"a": ["one", "two"], "b": ["three"]}
    assert left.errors == {"a": ["one"]}


def test_validation_error_accepts_plain_message() -> None:
    error = ValidationError("Something is off")

    assert error.errors == {"__root__": ["Something is off"]}
    assert ValidationError().errors == {}


# --- Pipeline ---


@pytest.mark.asyncio()
async def test_first_middleware_is_outermost() -> None:
    calls: list[str] = []

    def tracing(name: str):
        async def middleware(message, next_handler):
            calls.append(f"{name}:before")
            result = await next_handler(message)
            calls.append(f"{name}:after")
            return result

        return middleware

    async def handler(message):
        calls.append("handler")
        return "done"

    pipeline = build_pipeline([tracing("outer"), tracing("inner")], handler)

    assert await pipeline(MyCommand(data="x")) == "done"
    assert calls == [
        "outer:before",
        "inner:before",
        "handler",
        "inner:after",
        "outer:after",
    ]


# --- Scoped validators ---


class OtherCommand(Command):
    data: str = ""


@pytest.mark.asyncio()
async def test_scoped_validator_only_sees_its_commands() -> None:
    scoped = AsyncMock()
    scoped.validate.return_value = ValidationResult.failure({"data": ["nope"]})
    composite = CompositeValidator()
    composite.add(scoped, MyCommand)

    assert await composite.validate(OtherCommand())
    assert composite.validators_for(OtherCommand()) == []

    result = await composite.validate(MyCommand(data="x"))
    assert result.messages_for("data") == ["nope"]
    scoped.validate.assert_awaited_once()


def test_result_to_dict() -> None:
    result = ValidationResult.success()
    result.add_error("gift_id", "Gift not found")

    assert result.to_dict() == {"valid": False, "errors": {"gift_id": ["Gift not found"]}}
    assert ValidationResult.success().to_dict() == {"valid": True, "errors": {}}


@pytest.mark.asyncio()
async def test_slow_commands_are_warned_about(caplog) -> None:
    caplog.set_level(logging.INFO)
    middleware = LoggingMiddleware(slow_ms=0)

    await middleware(MyCommand(data="x"), AsyncMock(return_value="done"))

    [completed] = [r for r in caplog.records if "completed in" in r.getMessage()]
    assert completed.levelno == logging.WARNING


@pytest.mark.asyncio()
async def test_rejection_is_logged(caplog) -> None:
    caplog.set_level(logging.INFO, logger="giftdesk.middleware")
    middleware = ValidatorMiddleware(RejectBlank())

    with pytest.raises(ValidationError):
        await middleware(MyCommand(data=""), AsyncMock())

    assert "Rejected MyCommand: data: Data is required" in caplog.text
