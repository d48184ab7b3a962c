"""A minimal stand-in for the statsd daemon, for functional tests."""
import socket


class Reading(object):
    def __init__(self, key, value, metric_type, sample_rate=None):
        self.key = key
        self.value = value
        self.metric_type = metric_type
        self.sample_rate = sample_rate

    def __repr__(self):
        return "Reading(%r, %r, %r, %r)" % (
            self.key, self.value, self.metric_type, self.sample_rate)


def parse_line(line):
    """Parse one ``name:value|type[|@rate]`` line the way the daemon does."""
    key, _, rest = line.partition(":")
    fields = rest.split("|")
    if len(fields) < 2:
        raise ValueError("bad line: %r" % line)

    sample_rate = None
    if len(fields) > 2 and fields[2].startswith("@"):
        sample_rate = float(fields[2][1:])
    return Reading(key, fields[0], fields[1], sample_rate)


class MockDaemon(object):
    """Listen on a free local UDP port and collect what arrives."""

    def __init__(self):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.settimeout(0.5)
        self.host, self.port = self.sock.getsockname()

    def receive_packets(self, expected):
        """Return up to ``expected`` raw packets, stopping at a timeout."""
        packets = []
        while len(packets) < expected:
            try:
                data = self.sock.recv(65535)
            except socket.timeout:
                break
            packets.append(data.decode("utf-8"))
        return packets

    def receive_readings(self, expected_packets):
        readings = []
        for packet in self.receive_packets(expected_packets):
            for line in packet.strip().split("\n"):
                readings.append(parse_line(line))
        return readings

    def close(self):
        self.sock.close()
