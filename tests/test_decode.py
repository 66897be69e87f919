from __future__ import annotations

import json

import pytest

from scrapperbot.exceptions import ScrapperDecodeError
from scrapperbot.ingestion.decode import decode_line
from scrapperbot.models.messages import BotMessage, MessageType, ReadyMessage, UnknownMessage

_BOT = {
    "Type": "BOT",
    "PID": 2,
    "BID": 3,
    "X": 140,
    "Y": -20,
    "Health": 9,
    "Fired": True,
    "HitX": 10,
    "HitY": 12,
    "Scrap": 4,
    "Shield": False,
}


def test_decode_bot_message() -> None:
    message = decode_line(json.dumps(_BOT) + "\n")

    assert isinstance(message, BotMessage)
    assert message.unit_id == (2, 3)
    assert (message.x, message.y, message.health) == (140, -20, 9)
    assert message.fired is True
    assert message.scrap == 4


def test_decode_ready_message_with_roster() -> None:
    line = json.dumps({"Type": "READY", "PID": 1, "Bots": [_BOT, {**_BOT, "PID": 1, "BID": 1}]})

    message = decode_line(line)

    assert isinstance(message, ReadyMessage)
    assert message.pid == 1
    assert [bot.unit_id for bot in message.bots] == [(2, 3), (1, 1)]


def test_decode_ready_with_null_roster() -> None:
    message = decode_line('{"Type": "READY", "PID": 4, "Bots": null}')

    assert isinstance(message, ReadyMessage)
    assert message.bots == []


def test_bot_telemetry_fields_are_optional() -> None:
    message = decode_line('{"Type":"BOT","PID":1,"BID":1,"X":0,"Y":0,"Health":12}')

    assert isinstance(message, BotMessage)
    assert message.shield is False


def test_unknown_type_decodes_to_unknown_message() -> None:
    message = decode_line('{"Type": "SCORE", "Value": 3}')

    assert isinstance(message, UnknownMessage)
    assert message.type == "SCORE"
    assert message.raw == {"Type": "SCORE", "Value": 3}


@pytest.mark.parametrize("line", ["not json", "[1, 2]", '{"PID": 1}', '{"Type": 5}', ""])
def test_undecodable_lines_carry_no_message_type(line: str) -> None:
    with pytest.raises(ScrapperDecodeError) as exc_info:
        decode_line(line)

    assert exc_info.value.message_type is None


def test_malformed_known_payload_reports_its_type() -> None:
    with pytest.raises(ScrapperDecodeError) as exc_info:
        decode_line('{"Type": "BOT", "PID": 1, "BID": "x", "X": 0, "Y": 0, "Health": 1}')

    assert exc_info.value.message_type == MessageType.BOT
