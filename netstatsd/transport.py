"""UDP transport to a statsd daemon."""
import collections
import logging
import socket

from .const import DEFAULT_HOST, DEFAULT_PORT, MAXIMUM_WARNED_TARGETS
from .formatting import format_packet


_LOG = logging.getLogger(__name__)


class UDPTransport(object):
    """Send metric batches to a statsd daemon, one datagram per metric.

    The socket is created on first use and kept for later sends. Changing
    the host or port makes the next send connect to the new target.

    Instances are not thread safe; callers sharing one across threads must
    serialize access themselves.

    """
    def __init__(self, host=DEFAULT_HOST, port=DEFAULT_PORT,
                 max_warned_targets=MAXIMUM_WARNED_TARGETS):
        self.host = host
        self.port = port
        self.sock = None
        self.sock_target = None
        self.max_warned_targets = max_warned_targets
        self._warned_targets = collections.OrderedDict()

    @property
    def target(self):
        return (self.host, self.port)

    def _connect(self):
        target = self.target
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except socket.error as err:
            self._warn_once(target, err)
            return None

        try:
            sock.connect(target)
        except (socket.error, OverflowError) as err:
            sock.close()
            self._warn_once(target, err)
            return None

        self.close()
        self.sock = sock
        self.sock_target = target
        return sock

    def _warn_once(self, target, err):
        key = "%s:%s" % target
        if key in self._warned_targets:
            return

        _LOG.warning("can't create a socket to %s: %s", key, err)
        self._warned_targets[key] = True
        while len(self._warned_targets) > self.max_warned_targets:
            self._warned_targets.popitem(last=False)

    def _get_socket(self):
        if self.sock is None or self.sock_target != self.target:
            return self._connect()
        return self.sock

    def send(self, batch):
        """Send each metric in the batch as its own datagram.

        Returns None if there was nothing to send, False if the socket could
        not be created or any datagram failed or was truncated, and True if
        every datagram went out whole.

        """
        if not batch:
            return None

        sock = self._get_socket()
        if sock is None:
            return False

        all_sent = True
        for name, value in batch.items():
            packet = format_packet(name, value).encode("utf-8", "replace")
            try:
                sent = sock.send(packet)
            except socket.error as err:
                _LOG.debug("failed to send %r: %s", packet, err)
                all_sent = False
                continue

            if sent != len(packet):
                _LOG.debug("truncated send of %r: %d of %d bytes",
                           packet, sent, len(packet))
                all_sent = False

        return all_sent

    def close(self):
        """Close the cached socket, if any."""
        if self.sock is not None:
            self.sock.close()
        self.sock = None
        self.sock_target = None

    def reset_warnings(self):
        """Forget which targets have already been warned about."""
        self._warned_targets.clear()
