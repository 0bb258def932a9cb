import unittest

from web3 import Web3

from lottery.chain import BlockInfo, LocalChain
from lottery.randomness import entropy, winner_index
from lottery.state import LotteryState
from lottery.types import to_identity

PLAYERS = [to_identity("0x" + digit * 40) for digit in "123"]


class WinnerIndexTests(unittest.TestCase):
    def test_entropy_is_keccak_of_packed_public_inputs(self) -> None:
        block = BlockInfo(number=10, timestamp=1_700_000_120, difficulty=123456789)
        packed = (
            block.difficulty.to_bytes(32, "big")
            + block.timestamp.to_bytes(32, "big")
            + b"".join(bytes(12) + bytes.fromhex(p[2:]) for p in PLAYERS)
        )

        self.assertEqual(entropy(block, PLAYERS), int.from_bytes(Web3.keccak(packed), "big"))

    def test_index_is_within_roster(self) -> None:
        for timestamp in range(1_700_000_000, 1_700_000_050):
            block = BlockInfo(number=1, timestamp=timestamp, difficulty=42)
            self.assertIn(winner_index(block, PLAYERS), range(len(PLAYERS)))

    def test_same_block_and_roster_give_same_index(self) -> None:
        block = BlockInfo(number=3, timestamp=1_700_000_036, difficulty=99)
        self.assertEqual(winner_index(block, PLAYERS), winner_index(block, list(PLAYERS)))

    def test_empty_roster_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            winner_index(BlockInfo(number=0, timestamp=0, difficulty=0), [])

    def test_outcome_is_predictable_from_public_block_data(self) -> None:
        # Anyone watching the chain can compute the winner before the last entry lands.
        chain = LocalChain(seed=2024)
        lottery = LotteryState("0x" + "a" * 40, ticket_price=5, max_players=3, chain=chain)
        lottery.enter(PLAYERS[0], 5)
        lottery.enter(PLAYERS[1], 5)

        predicted = PLAYERS[winner_index(chain.latest(), PLAYERS)]
        record = lottery.enter(PLAYERS[2], 5)

        self.assertEqual(record.winner, predicted)


class LocalChainTests(unittest.TestCase):
    def test_blocks_are_deterministic(self) -> None:
        first = LocalChain(seed=1, genesis_timestamp=1000, block_time=5)
        second = LocalChain(seed=1, genesis_timestamp=1000, block_time=5)
        first.mine(3)
        second.mine(3)

        self.assertEqual(first.latest(), second.latest())
        self.assertEqual(first.latest().number, 3)
        self.assertEqual(first.latest().timestamp, 1015)

    def test_seed_changes_difficulty(self) -> None:
        self.assertNotEqual(LocalChain(seed=1).latest().difficulty, LocalChain(seed=2).latest().difficulty)

    def test_advance_mines_one_block(self) -> None:
        chain = LocalChain()
        chain.advance()
        self.assertEqual(chain.latest().number, 1)

    def test_unmined_block_is_rejected(self) -> None:
        chain = LocalChain()
        with self.assertRaises(ValueError):
            chain.block(1)
        with self.assertRaises(ValueError):
            chain.mine(0)
        with self.assertRaises(ValueError):
            LocalChain(block_time=0)


if __name__ == "__main__":
    unittest.main()
