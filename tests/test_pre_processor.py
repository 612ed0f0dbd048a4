import pytest

from rvps.message import Message, RvpsError
from rvps.pre_processor import Next, PreProcessor, Ware


class AppendWare(Ware):
    def __init__(self, tag):
        self.tag = tag

    def handle(self, message, context, next_wares):
        message.payload += self.tag
        context[self.tag] = message.payload
        next_wares.run(message, context)


class StopWare(Ware):
    def handle(self, message, context, next_wares):
        message.type = "stopped"


class FailWare(Ware):
    def handle(self, message, context, next_wares):
        raise RvpsError("rejected")


def _message():
    return Message(payload="", type="sample")


def test_empty_pre_processor_leaves_message_alone():
    message = _message()
    PreProcessor().process(message)
    assert message == _message()


def test_wares_run_in_order():
    processor = PreProcessor().add_ware(AppendWare("a")).add_ware(AppendWare("b"))
    message = _message()
    processor.process(message)
    assert message.payload == "ab"


def test_ware_can_stop_the_chain():
    processor = PreProcessor()
    processor.add_ware(StopWare())
    processor.add_ware(AppendWare("a"))
    message = _message()
    processor.process(message)
    assert message.type == "stopped"
    assert message.payload == ""


def test_errors_propagate():
    processor = PreProcessor().add_ware(AppendWare("a")).add_ware(FailWare())
    with pytest.raises(RvpsError, match="rejected"):
        processor.process(_message())


def test_next_shares_context():
    context = {}
    message = _message()
    Next([AppendWare("x"), AppendWare("y")]).run(message, context)
    assert context == {"x": "x", "y": "xy"}