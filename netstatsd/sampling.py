"""Probabilistic sampling of metric batches."""
from collections.abc import Mapping
import random

from .const import FULL_SAMPLE_RATE
from .formatting import annotate_rate


class InvalidBatchError(TypeError):
    """The metrics passed in are not in a shape that can be sent.

    This is a programming error on the caller's side and is raised
    immediately rather than being reported as a failed send.

    """
    pass


def sample(batch, rate=FULL_SAMPLE_RATE):
    """Return the batch to send at the given sample rate, or None.

    The decision is made once for the whole batch so that metrics sent
    together are either all delivered or all dropped. When the batch is
    kept at a rate below 1, every value is annotated with the rate so the
    daemon can scale it back up.

    """
    if not isinstance(batch, Mapping):
        raise InvalidBatchError("expected a mapping of metric names to "
                                "values, got %r" % (batch,))

    if rate is None:
        rate = FULL_SAMPLE_RATE

    if rate >= FULL_SAMPLE_RATE:
        return batch

    if random.random() > rate:
        return None

    return dict((name, annotate_rate(value, rate))
                for name, value in batch.items())
