import pytest

from ahbsim.core.burst import BurstProgress, burst_addresses, next_address, wrap_window
from ahbsim.core.exceptions import InvalidSizeError
from ahbsim.core.pipeline import Transaction
from ahbsim.core.signals import BurstType, TransferSize, TransferType

WORD = TransferSize.WORD
HALF = TransferSize.HALFWORD
BYTE = TransferSize.BYTE


class TestNextAddress:
    def test_wrap4_word_wraps_back_to_window_start(self):
        base = 0x40000010
        assert next_address(base, WORD, BurstType.WRAP4) == base + 4
        assert next_address(base + 12, WORD, BurstType.WRAP4) == base

    def test_incr4_word_does_not_wrap(self):
        base = 0x40000010
        assert next_address(base + 12, WORD, BurstType.INCR4) == base + 16

    @pytest.mark.parametrize(
        "burst, span",
        [(BurstType.WRAP4, 16), (BurstType.WRAP8, 32), (BurstType.WRAP16, 64)],
    )
    def test_word_wrap_window_sizes(self, burst, span):
        assert wrap_window(WORD, burst) == span
        last = 0x1000 + span - 4
        assert next_address(last, WORD, burst) == 0x1000

    def test_wrap_keeps_high_bits(self):
        assert next_address(0x4000003C, WORD, BurstType.WRAP16) == 0x40000000
        assert next_address(0x4000007C, WORD, BurstType.WRAP16) == 0x40000040

    def test_byte_and_halfword_steps(self):
        assert next_address(0x103, BYTE, BurstType.WRAP4) == 0x100
        assert next_address(0x103, BYTE, BurstType.INCR) == 0x104
        assert next_address(0x106, HALF, BurstType.WRAP4) == 0x100
        assert next_address(0x106, HALF, BurstType.INCR4) == 0x108

    def test_single_never_advances(self):
        assert next_address(0x20, WORD, BurstType.SINGLE) == 0x20

    def test_incr_wraps_at_32_bits(self):
        assert next_address(0xFFFFFFFC, WORD, BurstType.INCR) == 0

    def test_invalid_size_raises(self):
        with pytest.raises(InvalidSizeError):
            next_address(0x0, 3, BurstType.INCR4)

    def test_non_wrap_kind_has_no_window(self):
        assert wrap_window(WORD, BurstType.INCR8) is None


class TestBurstAddresses:
    def test_wrap4_from_aligned_start(self):
        assert burst_addresses(0x100, WORD, BurstType.WRAP4) == [0x100, 0x104, 0x108, 0x10C]

    def test_wrap4_from_middle_of_window(self):
        assert burst_addresses(0x108, WORD, BurstType.WRAP4) == [0x108, 0x10C, 0x100, 0x104]

    def test_incr4_linear(self):
        assert burst_addresses(0x108, WORD, BurstType.INCR4) == [0x108, 0x10C, 0x110, 0x114]

    def test_wrap8_visits_every_word_once(self):
        addresses = burst_addresses(0x114, WORD, BurstType.WRAP8)
        assert len(addresses) == 8
        assert sorted(addresses) == list(range(0x100, 0x120, 4))

    def test_incr_requires_beats(self):
        with pytest.raises(ValueError):
            burst_addresses(0x0, WORD, BurstType.INCR)
        assert burst_addresses(0x0, WORD, BurstType.INCR, beats=3) == [0x0, 0x4, 0x8]

    def test_zero_beats_rejected(self):
        with pytest.raises(ValueError):
            burst_addresses(0x0, WORD, BurstType.INCR, beats=0)


def _txn(addr, burst, trans=TransferType.NONSEQ):
    return Transaction(addr=addr, size=WORD, burst=burst, write=False, strobe=0xF, trans=trans)


class TestBurstProgress:
    def test_first_beat_uses_admitted_address(self):
        progress = BurstProgress()
        plan = progress.plan(_txn(0x10, BurstType.INCR4))
        assert plan.address == 0x10
        assert plan.index == 0
        assert plan.last is False

    def test_fixed_burst_completes_at_beat_count(self):
        progress = BurstProgress()
        plans = []
        txn = _txn(0x18, BurstType.WRAP4)
        for _ in range(4):
            plan = progress.plan(txn)
            plans.append(plan)
            progress.advance(plan)
            txn = _txn(0xDEAD0000, BurstType.WRAP4, TransferType.SEQ)

        assert [p.address for p in plans] == [0x18, 0x1C, 0x10, 0x14]
        assert [p.last for p in plans] == [False, False, False, True]
        assert progress.beat == 0
        assert progress.active is False
        assert progress.first_beat is True

    def test_single_is_last_on_first_beat(self):
        progress = BurstProgress()
        plan = progress.plan(_txn(0x0, BurstType.SINGLE))
        assert plan.last is True
        progress.advance(plan)
        assert progress.beat == 0

    def test_open_incr_never_completes(self):
        progress = BurstProgress()
        txn = _txn(0x0, BurstType.INCR)
        for _ in range(20):
            plan = progress.plan(txn)
            assert plan.last is False
            progress.advance(plan)
            txn = _txn(0x0, BurstType.INCR, TransferType.SEQ)
        assert progress.beat == 20
        assert progress.address == 19 * 4

    def test_nonseq_restarts_active_burst(self):
        progress = BurstProgress()
        progress.advance(progress.plan(_txn(0x0, BurstType.INCR8)))
        assert progress.active

        plan = progress.plan(_txn(0x40, BurstType.INCR4))
        assert plan.address == 0x40
        assert plan.index == 0

    def test_seq_without_active_burst_starts_at_latched_address(self):
        progress = BurstProgress()
        plan = progress.plan(_txn(0x24, BurstType.INCR4, TransferType.SEQ))
        assert plan.address == 0x24
        assert plan.index == 0

    def test_reset_clears_state(self):
        progress = BurstProgress()
        progress.advance(progress.plan(_txn(0x0, BurstType.INCR16)))
        progress.reset()
        assert (progress.beat, progress.active, progress.first_beat, progress.address) == (
            0,
            False,
            True,
            0,
        )
