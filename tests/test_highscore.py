import os
import tempfile
import unittest

from blockfall.highscore import HighScoreStore


class TestHighScoreStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "highscore.txt")
        self.store = HighScoreStore(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_given_missing_file_when_loading_then_zero(self):
        self.assertEqual(self.store.load(), 0)

    def test_given_higher_score_when_saving_then_written_and_reloaded(self):
        self.assertTrue(self.store.save_if_beaten(1250))
        self.assertEqual(self.store.load(), 1250)
        self.assertEqual(HighScoreStore(self.path).load(), 1250)

    def test_given_lower_or_equal_score_when_saving_then_file_untouched(self):
        self.store.save_if_beaten(5000)
        self.assertFalse(self.store.save_if_beaten(4000))
        self.assertFalse(self.store.save_if_beaten(5000))
        self.assertEqual(self.store.load(), 5000)

    def test_given_corrupt_file_when_loading_then_zero(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("not a number")
        with self.assertLogs("blockfall.highscore", level="WARNING"):
            self.assertEqual(self.store.load(), 0)
        self.assertTrue(self.store.save_if_beaten(10))
        self.assertEqual(self.store.load(), 10)

    def test_given_binary_garbage_when_loading_then_zero(self):
        with open(self.path, "wb") as f:
            f.write(b"\xff\xfe\x00garbage")
        with self.assertLogs("blockfall.highscore", level="WARNING"):
            self.assertEqual(self.store.load(), 0)


if __name__ == "__main__":
    unittest.main()
