"""Report the maximum send rate of the statsd client."""
import configparser
import logging
import logging.config
import os
import timeit

from .client import make_client


_LOG = logging.getLogger(__name__)

# port 9 is the standard discard service
_DEFAULT_ADDRESS = "localhost:9"
_DEFAULT_COUNT = 10000


def make_operations(client):
    """Return the named operations to time against a client."""
    return [
        ("increment", lambda: client.increment("foo.bar.i")),
        ("decrement", lambda: client.decrement("foo.bar.d")),
        ("timing_100", lambda: client.timing("foo.bar.t", 1)),
        ("timing_001", lambda: client.timing("foo.bar.t", 0.1)),
        ("gauge", lambda: client.gauge("foo.bar.g", 42)),
    ]


def run(client, count):
    """Time each operation ``count`` times and return (name, secs) pairs."""
    results = []
    for name, operation in make_operations(client):
        elapsed = timeit.timeit(operation, number=count)
        _LOG.info("%s: %d sends in %.3fs (%.0f/s)", name, count, elapsed,
                  count / elapsed if elapsed else float("inf"))
        results.append((name, elapsed))
    return results


def load_settings(config_file):
    parser = configparser.ConfigParser(interpolation=None)
    with open(config_file) as f:
        parser.read_file(f)

    settings = {}
    if parser.has_section("app:main"):
        settings.update(parser.items("app:main"))
    return settings


def main():
    """Run the benchmark.

    Two environment variables are read:

    * CONFIG_FILE: an INI file with an ``[app:main]`` section holding the
      client settings (see make_client) and the logging configuration.
    * COUNT: how many times to run each operation (default 10000).

    Metrics go to the discard service on localhost unless the configuration
    says otherwise.

    """
    config_file = os.environ["CONFIG_FILE"]
    logging.config.fileConfig(config_file, disable_existing_loggers=False)

    settings = load_settings(config_file)
    if not settings.get("statsd.address"):
        settings["statsd.address"] = _DEFAULT_ADDRESS

    count = int(os.environ.get("COUNT", _DEFAULT_COUNT))

    with make_client(settings) as client:
        _LOG.info("sending to %s:%d", client.host, client.port)
        run(client, count)


if __name__ == "__main__":
    main()
