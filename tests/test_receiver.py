import socket
import threading

import pytest

from broadcast_probe.config import Mode, RunConfiguration
from broadcast_probe.errors import TransportError
from broadcast_probe.runner import Broadcaster, Receiver, SenderAddress
from broadcast_probe.transport import create_socket, encode_counter

from .conftest import FakeSocket


@pytest.fixture
def sender():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    yield sock
    sock.close()


def receiver_config(port):
    return RunConfiguration(mode=Mode.RECEIVER, port=port, poll_interval=0.05)


def test_reports_value_and_sender(free_port, sender, lines):
    config = receiver_config(free_port)
    sock = create_socket(config)
    try:
        sender.sendto(encode_counter(7), ("127.0.0.1", free_port))
        messages = Receiver(sock, config, out=lines.append).run(max_messages=1)
    finally:
        sock.close()

    sender_port = sender.getsockname()[1]
    assert len(messages) == 1
    assert messages[0].value == 7
    assert messages[0].sender == SenderAddress("127.0.0.1", sender_port)
    assert messages[0].is_exact
    assert lines == ["Waiting for data", f"Received 7 from '127.0.0.1:{sender_port}'"]


def test_no_dedup_or_ordering(free_port, sender):
    config = receiver_config(free_port)
    sock = create_socket(config)
    try:
        for value in (3, 1, 1):
            sender.sendto(encode_counter(value), ("127.0.0.1", free_port))
        messages = Receiver(sock, config, out=lambda _: None).run(max_messages=3)
    finally:
        sock.close()

    assert [m.value for m in messages] == [3, 1, 1]


def test_oversized_and_short_datagrams():
    fake = FakeSocket(recv_results=[
        (encode_counter(9) + b"extra", ("10.0.0.2", 40061)),
        (b"\x00", ("10.0.0.3", 40061)),
    ])
    messages = Receiver(fake, RunConfiguration(), out=lambda _: None).run(max_messages=2)

    assert messages[0].value == 9
    assert messages[0].size == 9
    assert not messages[0].is_exact
    assert messages[1].value == 0
    assert messages[1].size == 1


def test_timeout_only_rechecks_stop():
    fake = FakeSocket(recv_results=[
        socket.timeout(),
        socket.timeout(),
        (encode_counter(1), ("10.0.0.2", 40061)),
    ])
    config = RunConfiguration(poll_interval=0.25)
    messages = Receiver(fake, config, out=lambda _: None).run(max_messages=1)

    assert fake.timeout == 0.25
    assert [m.value for m in messages] == [1]


def test_receive_failure_is_fatal():
    fake = FakeSocket(recv_results=[OSError(104, "Connection reset by peer")])
    with pytest.raises(TransportError) as info:
        Receiver(fake, RunConfiguration(), out=lambda _: None).run()
    assert info.value.step == "Receiving broadcast"


def test_stop_event_ends_blocked_receive(free_port):
    config = receiver_config(free_port)
    sock = create_socket(config)
    receiver = Receiver(sock, config, out=lambda _: None)
    timer = threading.Timer(0.2, receiver.stop)
    timer.start()
    try:
        assert receiver.run() == []
    finally:
        timer.cancel()
        sock.close()


def test_broadcaster_to_receiver(free_port, lines):
    config = receiver_config(free_port)
    receive_sock = create_socket(config)
    results = []

    receiver = Receiver(receive_sock, config, out=lines.append)
    thread = threading.Thread(target=lambda: results.extend(receiver.run(max_messages=2)))
    thread.start()

    send_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        send_config = RunConfiguration(
            port=free_port, destination_override="127.0.0.1", send_interval=0.05
        )
        Broadcaster(send_sock, send_config, out=lambda _: None).run(max_messages=2)
        thread.join(timeout=5)
    finally:
        receiver.stop()
        thread.join(timeout=5)
        send_sock.close()
        receive_sock.close()

    assert [m.value for m in results] == [0, 1]
    assert all(m.sender.host == "127.0.0.1" for m in results)


def test_unbounded_run_keeps_nothing():
    delivered = 50000
    stop = threading.Event()
    fake = FakeSocket(
        recv_results=[(encode_counter(n), ("10.0.0.2", 40061)) for n in range(delivered)],
        on_drained=stop.set,
    )
    printed = []

    result = Receiver(fake, RunConfiguration(), out=printed.append, stop_event=stop).run()

    assert result == []
    assert len(printed) == delivered + 1
    assert printed[-1] == f"Received {delivered - 1} from '10.0.0.2:40061'"


def test_messages_yields_in_arrival_order():
    stop = threading.Event()
    fake = FakeSocket(
        recv_results=[(encode_counter(n), ("10.0.0.2", 40061)) for n in (5, 6)],
        on_drained=stop.set,
    )
    receiver = Receiver(fake, RunConfiguration(), out=lambda _: None, stop_event=stop)

    assert [m.value for m in receiver.messages()] == [5, 6]
