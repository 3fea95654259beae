from decimal import Decimal

from batch_admin_backend.core.revenue import allocate, round2, teacher_earnings_from_sales


class TestAllocate:

    def test_hundred(self):
        shares = allocate(Decimal("100"))
        assert shares.teacher_share == Decimal("20.00")
        assert shares.platform_share == Decimal("30.00")

    def test_zero(self):
        assert allocate(0) == (Decimal("0.00"), Decimal("0.00"))

    def test_none_counts_as_zero(self):
        assert allocate(None) == (Decimal("0.00"), Decimal("0.00"))

    def test_shares_are_not_a_partition(self):
        shares = allocate(Decimal("1000"))
        assert shares.teacher_share + shares.platform_share == Decimal("500.00")

    def test_idempotent(self):
        assert allocate(Decimal("123.45")) == allocate(Decimal("123.45"))

    def test_half_cent_rounds_up(self):
        # 0.25 * 0.30 = 0.075 -> 0.08
        assert allocate(Decimal("0.25")).platform_share == Decimal("0.08")

    def test_sub_cent_revenue_is_not_prerounded(self):
        # 0.0166 * 0.30 = 0.00498 -> 0.00, while 0.02 * 0.30 would give 0.01
        shares = allocate(Decimal("0.0166"))
        assert shares.platform_share == Decimal("0.00")
        assert shares.teacher_share == Decimal("0.00")

    def test_rates_apply_to_exact_revenue(self):
        # 0.045 * 0.30 = 0.0135 -> 0.01, while 0.05 * 0.30 = 0.015 -> 0.02
        assert allocate(Decimal("0.045")).platform_share == Decimal("0.01")

    def test_explicit_rates(self):
        shares = allocate(Decimal("50"), teacher_rate=Decimal("0.5"), platform_rate=Decimal("0.1"))
        assert shares == (Decimal("25.00"), Decimal("5.00"))


class TestTeacherEarnings:

    def test_completed_amounts(self):
        assert teacher_earnings_from_sales([Decimal("50"), Decimal("30")]) == Decimal("24.00")

    def test_no_sales(self):
        assert teacher_earnings_from_sales([]) == Decimal("0.00")

    def test_round2(self):
        assert round2(2.675) == Decimal("2.68")
        assert round2("1.005") == Decimal("1.01")
