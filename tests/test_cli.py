import json
import logging
import os
import tempfile
from unittest import TestCase
from unittest.mock import MagicMock, Mock, patch

from ddns_adjuster import cli
from ddns_adjuster.errors import ConfigError


class TestParseArgs(TestCase):
    def test_defaults(self):
        args = cli.parse_args([], environ={})
        self.assertEqual(args.config, "config.json")
        self.assertEqual(args.log_path, "ddns.log")
        self.assertEqual(args.ip_file, "oldip.txt")
        self.assertEqual(args.interval, 300)
        self.assertEqual(args.timeout, 10)
        self.assertFalse(args.once)
        self.assertFalse(args.halt_on_error)
        self.assertFalse(args.run_immediately)

    def test_environment(self):
        environ = {
            "DDNS_ADJUSTER_CONFIG": "/etc/ddns/config.json",
            "DDNS_ADJUSTER_LOGPATH": "/var/log/ddns.log",
            "DDNS_ADJUSTER_IPFILEPATH": "/var/lib/ddns/oldip.txt",
            "DDNS_ADJUSTER_INTERVAL": "60",
        }
        args = cli.parse_args([], environ=environ)
        self.assertEqual(args.config, "/etc/ddns/config.json")
        self.assertEqual(args.log_path, "/var/log/ddns.log")
        self.assertEqual(args.ip_file, "/var/lib/ddns/oldip.txt")
        self.assertEqual(args.interval, 60)

    def test_flags_override_environment(self):
        args = cli.parse_args(["--interval", "30", "--once"], environ={"DDNS_ADJUSTER_INTERVAL": "60"})
        self.assertEqual(args.interval, 30)
        self.assertTrue(args.once)

    def test_invalid_interval(self):
        for value in ("soon", "0", "-5"):
            with self.assertRaises(ConfigError):
                cli.parse_args(["--interval", value], environ={})


class TestMain(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_path = self.path("config.json")
        self.ip_path = self.path("oldip.txt")
        self.log_path = self.path("ddns.log")
        with open(self.config_path, "w") as f:
            json.dump(
                {
                    "authEmail": "admin@example.com",
                    "authKey": "secret-key",
                    "zoneIdentifier": "zone123",
                    "recordName": "home.example.com",
                    "proxy": False,
                },
                f,
            )
        with open(self.ip_path, "w") as f:
            f.write("1.2.3.4")

        self.session = Mock()
        session_patch = patch("ddns_adjuster.cli.requests.Session")
        session_class = session_patch.start()
        session_class.return_value = MagicMock()
        session_class.return_value.__enter__.return_value = self.session
        self.addCleanup(session_patch.stop)

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            handler.close()
            root.removeHandler(handler)
        self.tmpdir.cleanup()

    def path(self, name):
        return os.path.join(self.tmpdir.name, name)

    def argv(self, *extra):
        return ["--config", self.config_path, "--ip-file", self.ip_path, "--log-path", self.log_path, *extra]

    def public_ip(self, ip):
        response = Mock()
        response.content = ip.encode()
        response.raise_for_status.return_value = None
        self.session.get.return_value = response

    def test_once_updates_record(self):
        self.public_ip("5.6.7.8\n")
        lookup, update = Mock(), Mock()
        lookup.json.return_value = {"success": True, "result": [{"id": "abc123"}]}
        update.json.return_value = {"success": True}
        self.session.request.side_effect = [lookup, update]

        self.assertEqual(cli.main(self.argv("--once")), cli.EXIT_OK)
        with open(self.ip_path) as f:
            self.assertEqual(f.read(), "5.6.7.8")
        with open(self.log_path) as f:
            log = f.read()
        self.assertIn("DDNS SCRIPT", log)
        self.assertIn("Starting DDNS Script", log)
        self.assertIn("dns record id : abc123", log)
        self.assertIn("Ending DDNS Script", log)

    def test_once_reports_failed_cycle(self):
        self.public_ip("5.6.7.8\n")
        rejected = Mock()
        rejected.json.return_value = {"success": False, "errors": []}
        self.session.request.return_value = rejected

        self.assertEqual(cli.main(self.argv("--once")), cli.EXIT_CYCLE_FAILED)
        with open(self.ip_path) as f:
            self.assertEqual(f.read(), "1.2.3.4")

    def test_bad_configuration_is_fatal(self):
        with open(self.config_path, "w") as f:
            f.write("{}")

        self.assertEqual(cli.main(self.argv("--once")), cli.EXIT_CONFIG)
        self.session.get.assert_not_called()
        with open(self.log_path) as f:
            self.assertIn("Fatal error", f.read())

    def test_scheduled_run_uses_scheduler(self):
        with patch("ddns_adjuster.cli.Scheduler") as scheduler_class:
            scheduler_class.return_value.run.return_value = 0
            self.assertEqual(cli.main(self.argv("--interval", "60", "--halt-on-error")), 0)

        _, kwargs = scheduler_class.call_args
        self.assertEqual(kwargs["interval"], 60)
        self.assertTrue(kwargs["halt_on_error"])
        self.assertFalse(kwargs["run_immediately"])

    def test_empty_log_path_is_fatal(self):
        self.assertEqual(cli.main(["--config", self.config_path, "--log-path", ""]), cli.EXIT_CONFIG)
        self.session.get.assert_not_called()

    def test_once_interrupted_stops_cleanly(self):
        self.session.get.side_effect = KeyboardInterrupt

        self.assertEqual(cli.main(self.argv("--once")), cli.EXIT_OK)
        with open(self.ip_path) as f:
            self.assertEqual(f.read(), "1.2.3.4")
        with open(self.log_path) as f:
            self.assertIn("Stopped", f.read())
