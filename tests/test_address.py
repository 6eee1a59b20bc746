import pytest

from modbuskit.address import NIL_ADDR, IPAddress, parse_ip


def test_string_round_trip():
    assert str(IPAddress("192.168.178.74")) == "192.168.178.74"


def test_loopback_value():
    assert int(IPAddress.from_octets(127, 0, 0, 1)) == 0x7F000001


def test_int_round_trip():
    address = IPAddress.from_octets(10, 20, 30, 40)
    assert IPAddress(int(address)) == address
    assert IPAddress(int(address)).octets() == (10, 20, 30, 40)


def test_octet_order_from_int_is_big_endian():
    address = IPAddress(0x7F000001)
    assert address[0] == 127
    assert address[3] == 1


def test_default_is_nil():
    assert IPAddress() == NIL_ADDR
    assert int(NIL_ADDR) == 0


@pytest.mark.parametrize("text", ["1.2.3.4.5", "1.2.3.4.", "a.b.c.d", "1.2.x.4", "1,2,3,4"])
def test_invalid_strings_give_nil(text):
    assert parse_ip(text) == 0
    assert IPAddress(text) == NIL_ADDR


def test_short_string_fills_trailing_zeros():
    assert IPAddress("1.2").octets() == (1, 2, 0, 0)


def test_equality_with_int_and_string():
    address = IPAddress.from_octets(192, 168, 1, 10)
    assert address == "192.168.1.10"
    assert address == int(IPAddress("192.168.1.10"))
    assert not (address != "192.168.1.10")
    assert address != "192.168.1.11"


def test_index_out_of_range_reads_zero():
    address = IPAddress("9.8.7.6")
    assert address[4] == 0
    assert address[-1] == 0


def test_setitem_changes_octet_and_ignores_bad_index():
    address = IPAddress("9.8.7.6")
    address[2] = 99
    address[7] = 1
    assert str(address) == "9.8.99.6"


def test_copy_constructor_is_independent():
    original = IPAddress("1.1.1.1")
    duplicate = IPAddress(original)
    duplicate[0] = 2
    assert original == "1.1.1.1"
    assert duplicate == "2.1.1.1"


def test_hash_consistent_with_equality():
    assert hash(IPAddress("4.3.2.1")) == hash(IPAddress.from_octets(4, 3, 2, 1))
    assert len({IPAddress("4.3.2.1"), IPAddress.from_octets(4, 3, 2, 1)}) == 1


def test_bad_type_raises():
    with pytest.raises(TypeError):
        IPAddress(1.5)