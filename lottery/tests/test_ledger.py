import unittest

from lottery.errors import PayoutFailure
from lottery.ledger import Ledger
from lottery.types import to_identity

ALICE = to_identity("0x" + "1" * 40)
BOB = to_identity("0x" + "2" * 40)


class LedgerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ledger = Ledger()

    def test_receive_and_pay(self) -> None:
        self.ledger.receive(ALICE, 100)
        self.ledger.receive(BOB, 100)
        self.ledger.pay(BOB, 200)

        self.assertEqual(self.ledger.contract_balance, 0)
        self.assertEqual(self.ledger.balance_of(BOB), 200)
        self.assertEqual(self.ledger.balance_of(ALICE), 0)

    def test_pay_more_than_balance_fails(self) -> None:
        self.ledger.receive(ALICE, 50)
        with self.assertRaises(PayoutFailure):
            self.ledger.pay(ALICE, 51)
        self.assertEqual(self.ledger.contract_balance, 50)

    def test_rejecting_recipient_fails(self) -> None:
        self.ledger.receive(ALICE, 50)
        self.ledger.reject_payments(ALICE)
        with self.assertRaises(PayoutFailure):
            self.ledger.pay(ALICE, 50)

        self.ledger.reject_payments(ALICE, rejecting=False)
        self.ledger.pay(ALICE, 50)
        self.assertEqual(self.ledger.balance_of(ALICE), 50)

    def test_negative_deposit_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.ledger.receive(ALICE, -1)

    def test_restore_snapshot(self) -> None:
        self.ledger.receive(ALICE, 30)
        snapshot = self.ledger.snapshot()
        self.ledger.pay(BOB, 30)
        self.ledger.restore(snapshot)

        self.assertEqual(self.ledger.contract_balance, 30)
        self.assertEqual(self.ledger.balance_of(BOB), 0)


if __name__ == "__main__":
    unittest.main()
