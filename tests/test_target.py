import pytest

from modbuskit.address import IPAddress
from modbuskit.target import Target, TargetError, parse_target


class FakeResolver:
    def __init__(self, answer="10.1.2.3"):
        self.answer = IPAddress(answer)
        self.calls = []

    def __call__(self, hostname):
        self.calls.append(hostname)
        return self.answer


def test_plain_ip_uses_defaults():
    resolver = FakeResolver()
    target = parse_target("192.168.1.10", resolver)
    assert target == Target(IPAddress("192.168.1.10"), 502, 1)
    assert resolver.calls == []


def test_ip_with_port_and_server():
    target = parse_target("192.168.1.10:1502:17", FakeResolver())
    assert str(target.ip) == "192.168.1.10"
    assert target.port == 1502
    assert target.server_id == 17


def test_ip_with_port_only():
    target = parse_target("192.168.1.10:1502", FakeResolver())
    assert target.port == 1502
    assert target.server_id == 1


@pytest.mark.parametrize("source", ["1.2.3.4:0", "1.2.3.4:70000", "my-host:0"])
def test_bad_port(source):
    with pytest.raises(TargetError) as info:
        parse_target(source, FakeResolver())
    assert info.value.field == "port"


@pytest.mark.parametrize("source", ["1.2.3.4:502:0", "1.2.3.4:502:248", "my-host:502:300"])
def test_bad_server_id(source):
    with pytest.raises(TargetError) as info:
        parse_target(source, FakeResolver())
    assert info.value.field == "server_id"


def test_server_id_upper_limit_accepted():
    assert parse_target("1.2.3.4:502:247", FakeResolver()).server_id == 247


def test_hostname_is_resolved():
    resolver = FakeResolver("10.1.2.3")
    target = parse_target("my-host.example.com:503:5", resolver)
    assert resolver.calls == ["my-host.example.com"]
    assert target == Target(IPAddress("10.1.2.3"), 503, 5)


def test_unresolvable_hostname():
    resolver = FakeResolver("0.0.0.0")
    with pytest.raises(TargetError) as info:
        parse_target("nowhere", resolver)
    assert info.value.field == "host"
    assert resolver.calls == ["nowhere"]


@pytest.mark.parametrize("source", ["bad host", "-leading", "host:", "1.2.3.4:502:7:9", ""])
def test_malformed_descriptor(source):
    with pytest.raises(TargetError) as info:
        parse_target(source, FakeResolver())
    assert info.value.field == "host"


@pytest.mark.parametrize("source", ["10.0.0.1", "300.1.1.1"])
def test_out_of_range_groups_go_to_resolver(source):
    resolver = FakeResolver("10.1.2.3")
    target = parse_target(source, resolver)
    assert resolver.calls == [source]
    assert target.ip == resolver.answer


def test_resolver_result_is_copied():
    resolver = FakeResolver("10.1.2.3")
    target = parse_target("my-host", resolver)
    resolver.answer[0] = 99
    assert target.ip == "10.1.2.3"