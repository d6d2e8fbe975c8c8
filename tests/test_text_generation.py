import json
import threading
from datetime import date
from decimal import Decimal

import pytest

from hostel_manager.core.exceptions import GenerationError
from hostel_manager.schemas.assistant import ChatMessage
from hostel_manager.schemas.payment import PaymentCreate
from hostel_manager.services.integrations import CHAT_FALLBACK_REPLY, AssistantService, TextGenerationService
from hostel_manager.services.payment import PaymentService, ReminderService, reminder_template


def test_reminder_template_wording():
    text = reminder_template("Anita", Decimal("12500"), date(2024, 3, 5))

    assert text.startswith("Dear Anita, this is a reminder that your payment of ₹12,500 was due on 05/03/2024.")
    assert "earliest convenience" in text


@pytest.mark.asyncio
async def test_generate_notice_sends_keywords(make_generator):
    generator = make_generator(text="  Water supply will be off on Sunday.  ")

    text = await generator.generate_notice(["water", "Sunday"])

    assert text == "Water supply will be off on Sunday."
    (request,) = generator.sent
    assert request.url.path.endswith(":generateContent")
    assert request.url.params["key"] == "test-key"
    body = json.loads(request.content)
    assert "water, Sunday" in body["contents"][0]["parts"][0]["text"]
    assert body["generationConfig"]["temperature"] == 0.7


@pytest.mark.asyncio
async def test_missing_api_key_is_a_generation_error():
    with pytest.raises(GenerationError):
        await TextGenerationService(api_key="").generate_text([])


@pytest.mark.asyncio
async def test_upstream_error_is_a_generation_error(make_generator):
    generator = make_generator(status_code=503)

    with pytest.raises(GenerationError) as exc_info:
        await generator.generate_notice(["power cut"])

    assert exc_info.value.details["status_code"] == 503


@pytest.mark.asyncio
async def test_empty_text_is_a_generation_error(make_generator):
    with pytest.raises(GenerationError):
        await make_generator(text="").chat([ChatMessage(role="user", text="hello")])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"candidates": ["plain string"]},
        {"candidates": [None]},
        {"candidates": [{"content": "text"}]},
        {"candidates": [{"content": {"parts": 7}}]},
        {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        {"candidates": "none"},
        ["not", "an", "object"],
    ],
)
async def test_malformed_body_is_a_generation_error(make_generator, body):
    with pytest.raises(GenerationError):
        await make_generator(body=body).generate_notice(["laundry"])


@pytest.mark.asyncio
async def test_chat_forwards_conversation(make_generator):
    generator = make_generator(text="Rent is due on the 5th.")
    messages = [
        ChatMessage(role="user", text="When is rent due?"),
        ChatMessage(role="model", text="Which month?"),
        ChatMessage(role="user", text="March"),
    ]

    response = await AssistantService(generator).chat(messages)

    assert response.reply == "Rent is due on the 5th."
    assert response.source == "generated"
    body = json.loads(generator.sent[0].content)
    assert [turn["role"] for turn in body["contents"]] == ["user", "model", "user"]


@pytest.mark.asyncio
async def test_chat_falls_back_to_apology(make_generator):
    response = await AssistantService(make_generator(status_code=500)).chat([ChatMessage(role="user", text="hi")])

    assert response.reply == CHAT_FALLBACK_REPLY
    assert response.source == "fallback"


@pytest.fixture
def due_payment(db_session, make_resident):
    resident = make_resident(name="Anita")
    return PaymentService(db_session).add_payment(
        PaymentCreate(resident_id=resident.id, amount=Decimal("8000"), date=date(2024, 3, 5)),
        today=date(2024, 3, 1),
    ).unwrap()


@pytest.mark.asyncio
async def test_reminder_uses_generated_text(db_session, make_generator, due_payment):
    reminder = (await ReminderService(db_session, make_generator(text="Please pay soon.")).payment_reminder(
        due_payment.id
    )).unwrap()

    assert reminder.text == "Please pay soon."
    assert reminder.source == "generated"


@pytest.mark.asyncio
async def test_reminder_falls_back_to_template(db_session, make_generator, due_payment):
    reminder = (await ReminderService(db_session, make_generator(status_code=500)).payment_reminder(
        due_payment.id
    )).unwrap()

    assert reminder.source == "template"
    assert reminder.text == reminder_template("Anita", Decimal("8000"), date(2024, 3, 5))


@pytest.mark.asyncio
async def test_reminder_for_unknown_payment(db_session, make_generator):
    result = await ReminderService(db_session, make_generator()).payment_reminder("missing")

    assert result.error_code.value == "NOT_FOUND"


@pytest.mark.asyncio
async def test_reminder_falls_back_on_malformed_upstream_body(db_session, make_generator, due_payment):
    generator = make_generator(body={"candidates": ["unexpected"]})

    reminder = (await ReminderService(db_session, generator).payment_reminder(due_payment.id)).unwrap()

    assert reminder.source == "template"
    assert reminder.text.startswith("Dear Anita")


@pytest.mark.asyncio
async def test_reminder_lookups_run_off_the_event_loop(db_session, make_generator, due_payment):
    service = ReminderService(db_session, make_generator())
    lookup_threads = []
    find_payment = service.payments.find_by_id

    def recording_find(payment_id):
        lookup_threads.append(threading.get_ident())
        return find_payment(payment_id)

    service.payments.find_by_id = recording_find

    (await service.payment_reminder(due_payment.id)).unwrap()

    assert lookup_threads
    assert threading.get_ident() not in lookup_threads
