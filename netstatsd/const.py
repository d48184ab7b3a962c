# where metrics go when nothing else is configured
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8125

# metric type suffixes understood by the daemon
COUNTER_TYPE = "c"
TIMING_TYPE = "ms"
GAUGE_TYPE = "g"

# at this rate or above nothing is sampled and no annotation is added
FULL_SAMPLE_RATE = 1

# maximum number of distinct targets remembered for the warn-once log
MAXIMUM_WARNED_TARGETS = 1024
