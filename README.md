# ostent

Building blocks for a small system monitor. The package reads per-interface
network counters and addresses, formats sizes, percentages and times for
people to read, parses listen-address and refresh-period flag values, and
writes access-log lines. A command-line front end parses flags and
sub-commands and opens a listening socket.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install .[test]
pytest
```

## Command line

```
ostent                 # listen on the default address, port 8050
ostent -b 127          # listen on 127.0.0.1, default port
ostent --bind :9000    # listen on all addresses, port 9000
ostent -v              # print the version and stop
ostent version         # print the version
ostent commands        # list the available commands with their flags
ostent commands -h version   # show one command and its flags
ostent -h              # usage
```

Bind addresses take the forms `host`, `port`, `host:port` and `*:port`.
`127` is short for `127.0.0.1`. `-b`, `-bind` and `--bind` are the same flag.

When no command asks it to stop, `ostent` opens a TCP listening socket on
the bind address, prints a banner with the addresses it listens on to
stderr, and waits until it receives SIGINT, SIGQUIT or SIGTERM.

## Library use

Formatting (`ostent.formatting`):

```python
from ostent.formatting import (
    human_b, human_bits, human_unitless, human_bandback,
    percent, format_percent, format_time, format_uptime,
)

human_b(1024)            # "1.0K"
human_bits(1023)         # "1023b"
human_unitless(1050)     # "1.1k"
human_bandback(1024)     # ("1.0K", 1024)
percent(201, 1000)       # 21
format_time(62000)       # "   01:02"
format_uptime(1080720)   # "12 days, 12:12"
```

Flag values (`ostent.bind`, `ostent.period`):

```python
from ostent.bind import Bind
from ostent.period import Period

b = Bind(9050)
b.set("localhost")
str(b)                   # "localhost:9050"

p = Period()
p.set("1s1s")
str(p)                   # "2s"
p.to_json()              # '"2s"'
```

Invalid values raise `ValueError`.

Network interfaces (`ostent.ifaddrs`, `ostent.collect`):

```python
from ostent.ifaddrs import getifaddrs
from ostent.collect import Machine, FoundIP, hardware_interface

for iface in getifaddrs():
    print(iface.name, iface.ip, iface.in_bytes, iface.out_bytes)

found = FoundIP()
Machine().apply_per_interface(found.next)
print(found.ip)          # IP of the first non-loopback hardware interface
```

Start-up banner (`ostent.banner`):

```python
import sys
from ostent.banner import banner

banner("[::]:8050", "ostent", sys.stdout.write)
```

Also available:

- `ostent.access`: `AccessLog` writes common-log style lines and, when
  `tagged_bin` is set, logs only the first successful request per host;
  `format_access_entry`, `render_panic_page`, `status_line`, `remote_host`.
- `ostent.background`: `BackgroundJobs` starts jobs in daemon threads;
  `Connections` holds registered receivers and ticks, pushes to and reloads
  them; `sleep_til_next_second`.
- `ostent.commands`: `CommandRegistry` for sub-commands and top-level flag
  handlers; `default_registry()` has the `commands` and `version` commands
  and the `-v` flag.

## What this package does not do

- It serves no HTTP: there is no web page, no event stream and no websocket
  endpoint. The command line only opens a listening socket and waits.
- It collects network interface counters and the host name only; it does not
  collect CPU, memory, swap, load average, disk or process figures.
- It does not send metrics to any external store and does not upgrade itself.