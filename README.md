# modbuskit

Small building blocks for Modbus tooling in pure Python, using only the
standard library.

## What is inside

- `modbuskit.coils`: `CoilData`, a packed bit store for Modbus coils
  (at most 2000 coils, packed LSB first as on the wire). Create one from a
  size (`CoilData(35)`, optionally all ON with `init_value=True`) or from a
  readable bit pattern with `CoilData.from_pattern("0101 1100")`. In a
  pattern, `1` and `0` are bits, `_` drops the bit that follows it, and any
  other character is ignored. Read coils by index or iteration, write them
  with `set()`, `set_bits()` (packed bytes), `set_coils()` (another set) or
  `set_pattern()`, reset them with `init()` or `assign_pattern()`, take a
  `slice()`, count them with `coils_set_on()` / `coils_set_off()`, get the
  packed bytes with `bytes(coils)` or `data()`, and render them with
  `format(label)`. A set compares equal to another set or to a pattern
  string. Out-of-range writes and bad input raise `CoilError`.
- `modbuskit.logs`: `LogLevel` (`NONE` to `VERBOSE`) and `ModbusLogger`,
  which writes level-filtered lines with a header (`log()`), headerless
  text (`raw()`) and hex dumps (`dump()`) to a stream; `CRITICAL` lines are
  coloured red and `ERROR` lines yellow. The `hex_dump()` helper renders
  bytes 16 per line with an ASCII column, and `file_name()` strips the
  directory part of a path.
- `modbuskit.address`: `IPAddress`, an IPv4 address built from a dotted
  string, a 32-bit integer or four octets (`IPAddress.from_octets`). Octets
  are readable and writable by index; it compares equal to other
  addresses, integers and dotted strings. `parse_ip()` turns a dotted string
  into its 32-bit value (0 for malformed text). `NIL_ADDR` is `0.0.0.0`.
- `modbuskit.client`: `Client`, a TCP connection with `connect()`,
  `write()`, `read()`, non-blocking `available()` and `peek()`,
  `connected()`, `set_no_delay()` and `disconnect()` / `stop()`. It can be
  used as a context manager. `hostname_to_ip()` looks up the first IPv4
  address of a host. Failures raise `ClientError`.
- `modbuskit.target`: `parse_target()` turns `IP[:port[:serverID]]` or
  `hostname[:port[:serverID]]` into a frozen `Target(ip, port, server_id)`,
  with port 502 and server ID 1 as defaults. A host name is looked up with
  `hostname_to_ip()` or a resolver you pass in. Bad input raises
  `TargetError`, whose `field` names the faulty part (`host`, `port` or
  `server_id`).

## Installation

```
pip install modbuskit
```

## Examples

Coils:

```python
from modbuskit.coils import CoilData

coils = CoilData(35)
coils.set(3, True)
coils.set_pattern(20, "0110 1001 0110")
print(coils.coils_set_on())
print(bytes(coils.slice(13, 12)).hex())
print(coils.format("State: "), end="")
```

Targets and addresses:

```python
from modbuskit.target import parse_target

target = parse_target("192.168.1.10:502:1")
print(target.ip, target.port, target.server_id)
```

Hex dumps:

```python
import sys
from modbuskit.logs import LogLevel, ModbusLogger

log = ModbusLogger(LogLevel.DEBUG, sys.stdout)
log.dump(LogLevel.INFO, "Response", b"\x01\x03\x02\x00\x2a")
```

A TCP connection:

```python
from modbuskit.client import Client

with Client("192.168.1.10", 502) as conn:
    conn.set_no_delay(True)
    conn.write(b"\x00\x01\x00\x00\x00\x06\x01\x03\x00\x00\x00\x02")
    print(conn.read(256).hex())
```

## What this package does not do

modbuskit does not build or decode Modbus messages, and it has no Modbus
client with request queues, no Modbus server and no RTU serial support.
`Client` moves raw bytes over TCP; framing requests and reading responses
is left to the caller. There are no command-line programs.

## Running the tests

```
pip install -e ".[test]"
pytest
```