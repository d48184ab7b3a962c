import os
import shutil
import tempfile
import unittest

import mock

from netstatsd import benchmark


CONFIG = """\
[app:main]
statsd.address = %s

[loggers]
keys = root

[handlers]
keys = null

[formatters]
keys =

[logger_root]
level = WARNING
handlers = null

[handler_null]
class = NullHandler
args = ()
"""


class BenchmarkTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir)

    def _write_config(self, address=""):
        path = os.path.join(self.tmpdir, "benchmark.ini")
        with open(path, "w") as f:
            f.write(CONFIG % address)
        return path

    def test_operations(self):
        client = mock.MagicMock()
        names = [name for name, op in benchmark.make_operations(client)]
        self.assertEqual(names, ["increment", "decrement", "timing_100",
                                 "timing_001", "gauge"])

        for name, operation in benchmark.make_operations(client):
            operation()
        client.increment.assert_called_with("foo.bar.i")
        client.timing.assert_called_with("foo.bar.t", 0.1)
        client.gauge.assert_called_with("foo.bar.g", 42)

    def test_run(self):
        client = mock.MagicMock()
        results = benchmark.run(client, 3)
        self.assertEqual(len(results), 5)
        self.assertEqual(client.increment.call_count, 3)
        self.assertEqual(client.timing.call_count, 6)

    def test_load_settings(self):
        path = self._write_config("1.2.3.4:1234")
        settings = benchmark.load_settings(path)
        self.assertEqual(settings["statsd.address"], "1.2.3.4:1234")

    @mock.patch("netstatsd.benchmark.run")
    def test_main_defaults_to_discard(self, mock_run):
        path = self._write_config()
        with mock.patch.dict(os.environ, {"CONFIG_FILE": path, "COUNT": "7"}):
            benchmark.main()

        client, count = mock_run.call_args[0]
        self.assertEqual((client.host, client.port), ("localhost", 9))
        self.assertEqual(count, 7)

    @mock.patch("netstatsd.benchmark.run")
    def test_main_configured_address(self, mock_run):
        path = self._write_config("127.0.0.1:8125")
        with mock.patch.dict(os.environ, {"CONFIG_FILE": path}):
            os.environ.pop("COUNT", None)
            benchmark.main()

        client, count = mock_run.call_args[0]
        self.assertEqual(client.port, 8125)
        self.assertEqual(count, 10000)
