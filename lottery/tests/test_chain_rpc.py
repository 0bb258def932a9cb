import unittest
from unittest import mock

from lottery.chain import BlockInfo, Web3BlockSource


class Web3BlockSourceTests(unittest.TestCase):
    def _source(self, block):
        web3 = mock.Mock()
        web3.eth.get_block.return_value = block
        return Web3BlockSource(web3), web3

    def test_pre_merge_block_uses_difficulty(self) -> None:
        source, web3 = self._source({"number": 12, "timestamp": 1000, "difficulty": 77, "mixHash": b"\x01" * 32})

        self.assertEqual(source.latest(), BlockInfo(number=12, timestamp=1000, difficulty=77))
        web3.eth.get_block.assert_called_once_with("latest")

    def test_post_merge_block_uses_prevrandao(self) -> None:
        mix_hash = bytes.fromhex("00" * 31 + "2a")
        source, _ = self._source({"number": 5, "timestamp": 2000, "difficulty": 0, "mixHash": mix_hash})

        self.assertEqual(source.latest().difficulty, 42)

    def test_block_without_entropy_is_rejected(self) -> None:
        source, _ = self._source({"number": 5, "timestamp": 2000, "difficulty": 0})
        with self.assertRaises(ValueError):
            source.latest()

    def test_from_url_requires_connection(self) -> None:
        with mock.patch("lottery.chain.rpc.Web3") as web3_cls:
            web3_cls.return_value.is_connected.return_value = False
            with self.assertRaises(ConnectionError):
                Web3BlockSource.from_url("http://localhost:8545")


if __name__ == "__main__":
    unittest.main()
