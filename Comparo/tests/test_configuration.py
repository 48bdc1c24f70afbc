import dataclasses
import io
import os
import tempfile
import unittest
from Comparo import create_default_logger
from Comparo.configuration import ComparisonConfiguration, load_and_validate_config, print_config
from Comparo.exceptions import InvalidConfiguration


class ConfigurationTester(unittest.TestCase):

    def setUp(self):
        self.logger = create_default_logger("test_configuration", level="CRITICAL")

    def test_defaults(self):
        config = load_and_validate_config(None, logger=self.logger)
        self.assertEqual(config.max_transcripts, 32)
        self.assertEqual(config.max_comparisons, 512)
        self.assertEqual(config.tolerance, 1e-9)
        self.assertEqual(config.threads, 1)
        self.assertEqual(config.log_settings.log_level, "INFO")
        self.assertIsNone(config.log_settings.log)

    def test_dict(self):
        config = load_and_validate_config({"max_transcripts": 0, "log_settings": {"log_level": "DEBUG"}},
                                          logger=self.logger)
        self.assertEqual(config.max_transcripts, 0)
        self.assertEqual(config.log_settings.log_level, "DEBUG")

    def test_invalid(self):
        for raw in ({"max_transcripts": -1}, {"threads": 0}, {"multiprocessing_method": "thread"},
                    {"log_settings": {"log_level": "VERBOSE"}}, {"unknown_key": 1}):
            with self.subTest(raw=raw), self.assertRaises(InvalidConfiguration):
                load_and_validate_config(raw, logger=self.logger)
        with self.assertRaises(InvalidConfiguration):
            ComparisonConfiguration(max_comparisons=-5)

    def test_object(self):
        config = ComparisonConfiguration(max_comparisons=10)
        self.assertIs(load_and_validate_config(config, logger=self.logger), config)
        config.threads = -1
        with self.assertRaises(InvalidConfiguration):
            load_and_validate_config(config, logger=self.logger)

    def test_files(self):
        contents = {
            ".yaml": "max_transcripts: 10\nlog_settings:\n  log_level: WARNING\n",
            ".toml": "max_transcripts = 10\n[log_settings]\nlog_level = \"WARNING\"\n",
            ".json": "{\"max_transcripts\": 10, \"log_settings\": {\"log_level\": \"WARNING\"}}\n"}
        for suffix, content in contents.items():
            with self.subTest(suffix=suffix), tempfile.TemporaryDirectory() as folder:
                fname = os.path.join(folder, "configuration" + suffix)
                with open(fname, "wt") as out:
                    out.write(content)
                config = load_and_validate_config(fname, logger=self.logger)
                self.assertEqual(config.max_transcripts, 10)
                self.assertEqual(config.log_settings.log_level, "WARNING")
                self.assertEqual(config.filename, fname)

    def test_missing_file(self):
        with self.assertRaises(InvalidConfiguration):
            load_and_validate_config("/this/file/does/not/exist.yaml", logger=self.logger)

    def test_print_round_trip(self):
        config = ComparisonConfiguration(max_transcripts=7, tolerance=1e-6)
        for output_format in ("yaml", "toml", "json"):
            with self.subTest(output_format=output_format), tempfile.TemporaryDirectory() as folder:
                out = io.StringIO()
                print_config(config, out, output_format=output_format)
                fname = os.path.join(folder, "configuration." + output_format)
                with open(fname, "wt") as handle:
                    handle.write(out.getvalue())
                loaded = load_and_validate_config(fname, logger=self.logger)
                loaded.filename = None
                self.assertEqual(dataclasses.asdict(loaded), dataclasses.asdict(config))


if __name__ == "__main__":
    unittest.main()
