"""Testes do normalizer inbound: despacho por tipo e degradação segura."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from wabridge.adapters.whatsapp.normalizer import (
    EXTRACTORS,
    log_mapped_message,
    map_inbound_message,
    normalize_webhook,
)

FIXTURE = Path(__file__).resolve().parents[2] / "fixtures" / "whatsapp_inbound.json"

TYPE_FIELDS = ("interactive", "media", "location", "contacts", "sticker")

BASE = {"from": "15550001111", "id": "wamid.TEST123", "timestamp": "1722470400"}

MINIMAL_MESSAGES = {
    "text": ({**BASE, "type": "text", "text": {"body": "Olá"}}, None),
    "interactive": (
        {
            **BASE,
            "type": "interactive",
            "interactive": {"button_reply": {"id": "b1", "title": "Sim"}},
        },
        "interactive",
    ),
    "image": ({**BASE, "type": "image", "image": {"id": "m1", "mime_type": "image/jpeg"}}, "media"),
    "video": ({**BASE, "type": "video", "video": {"id": "m2"}}, "media"),
    "audio": ({**BASE, "type": "audio", "audio": {"id": "m3"}}, "media"),
    "document": ({**BASE, "type": "document", "document": {"id": "m4"}}, "media"),
    "location": (
        {**BASE, "type": "location", "location": {"latitude": 1.5, "longitude": 2.5}},
        "location",
    ),
    "contacts": (
        {**BASE, "type": "contacts", "contacts": [{"name": {"formatted_name": "Ana"}}]},
        "contacts",
    ),
    "sticker": ({**BASE, "type": "sticker", "sticker": {"id": "s1"}}, "sticker"),
}


class TestDispatchCompleteness:
    def test_every_known_type_has_an_extractor(self):
        assert set(EXTRACTORS) == set(MINIMAL_MESSAGES)

    @pytest.mark.parametrize("message_type", sorted(MINIMAL_MESSAGES))
    def test_populates_exactly_one_type_field(self, message_type, make_value):
        message, expected_field = MINIMAL_MESSAGES[message_type]
        mapped = map_inbound_message(make_value(message))

        populated = [name for name in TYPE_FIELDS if getattr(mapped.message, name) is not None]
        assert populated == ([expected_field] if expected_field else [])
        assert mapped.message.type == message_type
        assert mapped.message.wamid == "wamid.TEST123"
        assert mapped.message.from_number == "15550001111"
        assert mapped.message.to == "15551234567"


class TestGarbageInput:
    def test_empty_envelope_returns_empty_message(self):
        """{} devolve a mensagem canônica toda nula, sem exceção."""
        body: dict = {}
        mapped = map_inbound_message(body)

        assert mapped.to_dict()["message"] == {
            "wamid": None,
            "from": None,
            "to": None,
            "type": None,
            "text": None,
            "interactive": None,
            "media": None,
            "location": None,
            "contacts": None,
            "sticker": None,
        }
        assert mapped.raw is body

    @pytest.mark.parametrize(
        "value",
        [None, "text", 42, [], {"messages": []}, {"messages": "x"}, {"messages": [None]}],
    )
    def test_non_envelopes_degrade(self, value):
        mapped = map_inbound_message(value)
        assert mapped.message.wamid is None
        assert mapped.raw is value

    def test_raw_is_echoed_on_success(self, make_value):
        value = make_value(MINIMAL_MESSAGES["text"][0])
        snapshot = json.dumps(value, sort_keys=True)

        mapped = map_inbound_message(value)

        assert mapped.raw is value
        assert json.dumps(mapped.to_dict()["raw"], sort_keys=True) == snapshot

    def test_unknown_type_keeps_envelope_only(self, make_value):
        mapped = map_inbound_message(make_value({**BASE, "type": "reaction", "reaction": {}}))

        assert mapped.message.type == "reaction"
        assert mapped.message.text is None
        assert all(getattr(mapped.message, name) is None for name in TYPE_FIELDS)

    def test_mapping_failure_returns_empty_message(self, make_value, monkeypatch):
        def boom(message):
            raise RuntimeError("boom")

        monkeypatch.setitem(EXTRACTORS, "text", boom)
        value = make_value(MINIMAL_MESSAGES["text"][0])

        mapped = map_inbound_message(value)

        assert mapped.message.type is None
        assert mapped.raw is value


class TestTextSummaries:
    def test_text_body(self, make_value):
        mapped = map_inbound_message(make_value(MINIMAL_MESSAGES["text"][0]))
        assert mapped.message.text == "Olá"

    def test_recipient_falls_back_to_phone_number(self, make_value):
        value = make_value(MINIMAL_MESSAGES["text"][0], phone_number="15559990000")
        assert map_inbound_message(value).message.to == "15559990000"

    @pytest.mark.parametrize(
        ("interactive", "expected_type", "expected_title"),
        [
            ({"type": "button_reply", "button_reply": {"title": "Sim"}}, "button", "Sim"),
            ({"button_reply": {"id": "b1"}}, "button", "b1"),
            ({"list_reply": {"id": "l1", "title": "Opção 1"}}, "list", "Opção 1"),
            ({"nfm_reply": {"name": "flow", "response_json": "{}"}}, "nfm", "flow"),
            ({"nfm_reply": {"response_json": "{}"}}, "nfm", "flow_response"),
            ({"type": "cta_url_reply", "cta_url_reply": {"name": "Site"}}, "cta_url_reply", "Site"),
            ({"type": "x", "call_permission_reply": {"id": "c1"}}, "call_permission_reply", "c1"),
            ({}, "unknown", None),
        ],
    )
    def test_interactive(self, make_value, interactive, expected_type, expected_title):
        mapped = map_inbound_message(
            make_value({**BASE, "type": "interactive", "interactive": interactive})
        )

        assert mapped.message.interactive is not None
        assert mapped.message.interactive.type == expected_type
        assert mapped.message.interactive.title == expected_title
        assert mapped.message.text == expected_title

    def test_media_caption_and_fields(self, make_value):
        mapped = map_inbound_message(
            make_value(
                {
                    **BASE,
                    "type": "document",
                    "document": {
                        "id": "m4",
                        "mime_type": "application/pdf",
                        "sha256": "abc",
                        "caption": "Nota fiscal",
                        "filename": "nf.pdf",
                    },
                }
            )
        )

        assert mapped.message.text == "Nota fiscal"
        assert mapped.message.media.model_dump() == {
            "id": "m4",
            "mime_type": "application/pdf",
            "sha256": "abc",
            "caption": "Nota fiscal",
            "filename": "nf.pdf",
        }

    def test_media_without_block(self, make_value):
        mapped = map_inbound_message(make_value({**BASE, "type": "image"}))
        assert mapped.message.text is None
        assert mapped.message.media.id is None

    def test_location_name_then_address_then_coordinates(self, make_value):
        named = {"latitude": 1, "longitude": 2, "name": "Loja", "address": "Rua A"}
        addressed = {"latitude": 1, "longitude": 2, "address": "Rua A"}
        bare = {"latitude": 0, "longitude": -46.6}

        texts = [
            map_inbound_message(make_value({**BASE, "type": "location", "location": loc}))
            .message.text
            for loc in (named, addressed, bare)
        ]

        assert texts == ["Loja", "Rua A", "Location: 0.0, -46.6"]

    def test_location_without_coordinates(self, make_value):
        mapped = map_inbound_message(
            make_value({**BASE, "type": "location", "location": {"latitude": 1}})
        )
        assert mapped.message.text == "Location"
        assert mapped.message.location.longitude is None

    def test_location_zero_coordinate_is_kept(self, make_value):
        mapped = map_inbound_message(
            make_value({**BASE, "type": "location", "location": {"latitude": 0, "longitude": 0}})
        )
        assert mapped.message.location.latitude == 0.0
        assert mapped.message.location.longitude == 0.0

    def test_contacts_summary(self, make_value):
        contacts = [
            {"name": {"formatted_name": "Ana Souza", "first_name": "Ana"}},
            {"name": {"first_name": "Bruno"}},
            {"phones": [{"phone": "+5511999990000"}]},
        ]
        mapped = map_inbound_message(
            make_value({**BASE, "type": "contacts", "contacts": contacts})
        )

        assert mapped.message.text == "Shared 3 contact(s): Ana Souza, Bruno, Unknown Contact"
        assert mapped.message.contacts == contacts

    def test_empty_contacts(self, make_value):
        mapped = map_inbound_message(make_value({**BASE, "type": "contacts", "contacts": []}))
        assert mapped.message.text == ""
        assert mapped.message.contacts is None

    def test_sticker(self, make_value):
        mapped = map_inbound_message(
            make_value({**BASE, "type": "sticker", "sticker": {"id": "s1", "animated": True}})
        )

        assert mapped.message.text == "Sticker message"
        assert mapped.message.sticker.animated is True


class TestNormalizeWebhook:
    def test_fixture_skips_status_changes(self):
        body = json.loads(FIXTURE.read_text(encoding="utf-8"))
        mapped = normalize_webhook(body)

        assert len(mapped) == 1
        assert mapped[0].message.type == "text"
        assert mapped[0].raw is body["entry"][0]["changes"][0]["value"]

    def test_preserves_change_order(self, make_value, make_body):
        first = make_value({**BASE, "id": "wamid.1", "type": "text", "text": {"body": "a"}})
        second = make_value({**BASE, "id": "wamid.2", "type": "sticker", "sticker": {}})

        mapped = normalize_webhook(make_body(first, second))

        assert [m.message.wamid for m in mapped] == ["wamid.1", "wamid.2"]

    def test_ignores_other_fields(self, make_value, make_body):
        value = make_value(MINIMAL_MESSAGES["text"][0])
        assert normalize_webhook(make_body(value, field="account_update")) == []

    @pytest.mark.parametrize("body", [None, [], {}, {"entry": "x"}, {"entry": [None]}])
    def test_garbage_bodies(self, body):
        assert normalize_webhook(body) == []


def test_log_mapped_message_masks_phone(make_value, caplog):
    mapped = map_inbound_message(make_value(MINIMAL_MESSAGES["text"][0]))

    with caplog.at_level(logging.INFO):
        log_mapped_message(mapped, context="webhook")

    record = next(r for r in caplog.records if r.getMessage() == "inbound_message_details")
    assert record.__dict__["from"] == "155******11"
    assert record.text_preview == "Olá"
    assert record.has_media is False
