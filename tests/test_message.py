import json

import pytest

from rvps.message import DEFAULT_STORAGE_TYPE, MESSAGE_VERSION, Config, Message, RvpsError


def test_message_from_json_keeps_fields():
    text = json.dumps({"version": "9.9.9", "payload": "abc", "type": "sample"})
    message = Message.from_json(text)
    assert message == Message(payload="abc", type="sample", version="9.9.9")


def test_message_version_defaults():
    message = Message.from_json(json.dumps({"payload": "abc", "type": "sample"}))
    assert message.version == MESSAGE_VERSION == "0.1.0"


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"type": "sample"}),
        json.dumps({"payload": "abc"}),
        json.dumps({"payload": 1, "type": "sample"}),
    ],
)
def test_bad_message_raises(text):
    with pytest.raises(RvpsError, match="parse message"):
        Message.from_json(text)


def test_config_defaults():
    config = Config()
    assert config.store_type == DEFAULT_STORAGE_TYPE == "LocalFs"
    assert config.store_config == {}


def test_config_from_dict():
    config = Config.from_dict({"store_type": "LocalJson", "store_config": {"file_path": "x"}})
    assert config.store_type == "LocalJson"
    assert config.store_config == {"file_path": "x"}


@pytest.mark.parametrize(
    "data",
    [{"store_type": "LocalFs"}, {"store_config": {}}, {"store_type": 3, "store_config": {}}],
)
def test_config_from_dict_rejects_incomplete(data):
    with pytest.raises(RvpsError):
        Config.from_dict(data)