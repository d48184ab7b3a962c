"""Rendering of metric values into the statsd line protocol."""

from .const import COUNTER_TYPE, GAUGE_TYPE, TIMING_TYPE


def format_counter(delta):
    """Return the fragment for a counter changed by ``delta``."""
    return "%d|%s" % (delta, COUNTER_TYPE)


def format_timing(time_ms):
    """Return the fragment for a duration in milliseconds.

    The protocol has no fractional timings, so the value is truncated.

    """
    return "%d|%s" % (time_ms, TIMING_TYPE)


def format_gauge(value):
    """Return the fragment for an instantaneous value.

    Fractional values are kept as they are; a missing value reads as zero.

    """
    if value is None:
        value = 0
    return "%s|%s" % (value, GAUGE_TYPE)


def annotate_rate(value, rate):
    """Mark a fragment as sampled at ``rate``."""
    return "%s|@%s" % (value, rate)


def format_packet(name, value):
    return "%s:%s" % (name, value)
