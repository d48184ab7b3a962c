"""Client for the statsd stats system."""
from collections.abc import Mapping
import functools
import logging
import time

from baseplate.lib import config

from .const import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    FULL_SAMPLE_RATE,
    MAXIMUM_WARNED_TARGETS,
)
from .formatting import (
    format_counter,
    format_gauge,
    format_packet,
    format_timing,
)
from .sampling import InvalidBatchError, sample
from .transport import UDPTransport


_LOG = logging.getLogger(__name__)


class StatsdClient(object):
    """Client for a statsd stats system.

    Every operation returns the result of the send: None when nothing was
    sent (sampled out), False when the transport failed and True otherwise.
    Transport problems never raise; only malformed arguments do.

    """
    def __init__(self, host=DEFAULT_HOST, port=DEFAULT_PORT, transport=None):
        if transport is None:
            transport = UDPTransport(host, port)
        self.transport = transport

    @property
    def host(self):
        return self.transport.host

    @host.setter
    def host(self, value):
        self.transport.host = value

    @property
    def port(self):
        return self.transport.port

    @port.setter
    def port(self, value):
        self.transport.port = value

    def send(self, batch, sample_rate=FULL_SAMPLE_RATE):
        """Sample a prebuilt batch of name to value fragments and send it."""
        return self.transport.send(sample(batch, sample_rate))

    def timing(self, name, time_ms, sample_rate=FULL_SAMPLE_RATE):
        """Record a duration, in milliseconds."""
        return self.send({name: format_timing(time_ms)}, sample_rate)

    def update(self, names, delta=1, sample_rate=FULL_SAMPLE_RATE):
        """Change one or more counters by ``delta``.

        ``names`` is either a single metric name or a sequence of them.

        """
        if delta is None:
            delta = 1

        names = _as_names(names)
        value = format_counter(delta)
        return self.send(dict((name, value) for name in names), sample_rate)

    def increment(self, names, sample_rate=FULL_SAMPLE_RATE):
        """Add one to one or more counters."""
        return self.update(names, 1, sample_rate)

    inc = increment

    def decrement(self, names, sample_rate=FULL_SAMPLE_RATE):
        """Subtract one from one or more counters."""
        return self.update(names, -1, sample_rate)

    dec = decrement

    def gauge(self, name=None, value=None, *more):
        """Record instantaneous values, as a temperature or server load.

        Takes one or more name/value pairs:

            client.gauge("core.temperature", 55)
            client.gauge("load.1m", 0.98, "load.5m", 0.87)

        Values for a name repeated in one call are sent together in a single
        packet, one line each. Gauges are never sampled.

        """
        pairs = (name, value) + more
        if len(pairs) % 2:
            pairs += (None,)

        batch = {}
        for i in range(0, len(pairs), 2):
            key, fragment = pairs[i], format_gauge(pairs[i + 1])
            if not isinstance(key, str):
                raise InvalidBatchError("gauge names must be strings, got %r"
                                        % (key,))
            if key in batch:
                fragment = batch[key] + "\n" + format_packet(key, fragment)
            batch[key] = fragment

        return self.send(batch, FULL_SAMPLE_RATE)

    def timer(self, name, sample_rate=FULL_SAMPLE_RATE):
        """Time a block or a function and report it with timing().

            with client.timer("database.query"):
                run_query()

            @client.timer("jobs.cleanup")
            def cleanup():
                ...

        """
        return _Timer(self, name, sample_rate)

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class _Timer(object):
    def __init__(self, client, name, sample_rate):
        self.client = client
        self.name = name
        self.sample_rate = sample_rate
        self._start = None

    def __enter__(self):
        self._start = time.time()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        elapsed_ms = (time.time() - self._start) * 1000
        self.client.timing(self.name, elapsed_ms, self.sample_rate)

    def __call__(self, func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with _Timer(self.client, self.name, self.sample_rate):
                return func(*args, **kwargs)
        return wrapper


def _as_names(names):
    if isinstance(names, str):
        return [names]

    usage = "usage: update(name, ...) or update([name, ...], ...)"
    if isinstance(names, Mapping):
        raise InvalidBatchError(usage)

    try:
        names = list(names)
    except TypeError:
        raise InvalidBatchError(usage)

    if not all(isinstance(name, str) for name in names):
        raise InvalidBatchError(usage)
    return names


def parse_address(address):
    """Split a ``host[:port]`` string, defaulting the port."""
    host, colon, port = address.partition(":")
    if colon != ":" or not port:
        port = DEFAULT_PORT
    return host or DEFAULT_HOST, int(port)


def make_client(settings, prefix="statsd"):
    """Return a client configured from an application settings dict.

    Recognized settings (with the default prefix):

    * ``statsd.address``: ``host[:port]`` of the daemon, defaulting to
      ``localhost:8125``.
    * ``statsd.max_warned_targets``: how many failing targets to remember
      so that each is only warned about once.

    """
    cfg = config.parse_config(settings, {
        prefix: {
            "address": config.Optional(config.String, default=""),
            "max_warned_targets": config.Optional(
                config.Integer, default=MAXIMUM_WARNED_TARGETS),
        },
    })
    statsd_cfg = getattr(cfg, prefix)

    host, port = parse_address(statsd_cfg.address or "")
    _LOG.debug("sending metrics to %s:%d", host, port)
    transport = UDPTransport(
        host, port, max_warned_targets=statsd_cfg.max_warned_targets)
    return StatsdClient(transport=transport)
