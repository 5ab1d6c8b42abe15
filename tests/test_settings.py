import unittest
from pydantic import ValidationError
from prefix_sums.lib.settings import PrefixSumIndexSettings


class Test(unittest.TestCase):
    def test_defaults(self):
        settings = PrefixSumIndexSettings.from_environ({})
        self.assertTrue(settings.enforce_int64)
        self.assertIsNone(settings.log_file)
        self.assertEqual(settings.log_rotation, "100 MB")

    def test_reads_environment(self):
        settings = PrefixSumIndexSettings.from_environ(
            {
                "PREFIX_SUMS_ENFORCE_INT64": "false",
                "PREFIX_SUMS_LOG_FILE": "prefix_sums.log",
                "PREFIX_SUMS_LOG_ROTATION": "1 day",
            }
        )
        self.assertFalse(settings.enforce_int64)
        self.assertEqual(settings.log_file, "prefix_sums.log")
        self.assertEqual(settings.log_rotation, "1 day")

    def test_blank_log_file_is_unset(self):
        settings = PrefixSumIndexSettings.from_environ({"PREFIX_SUMS_LOG_FILE": ""})
        self.assertIsNone(settings.log_file)

    def test_malformed(self):
        with self.assertRaises(ValidationError):
            PrefixSumIndexSettings.from_environ({"PREFIX_SUMS_ENFORCE_INT64": "maybe"})


if __name__ == "__main__":
    unittest.main()
