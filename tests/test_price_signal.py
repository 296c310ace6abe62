import asyncio
import random

import pytest

from app.exceptions import PairNotFound, PriceUnavailable, UpstreamFailure
from app.services.price_oracle import StaticPriceOracle
from app.services.price_signal import AggregatorSignal, SyntheticSeedSignal
from tests.helpers import TOKEN_MINT, json_client, raw_pair


def snapshot(signal, interval="5m"):
    return asyncio.run(signal.snapshot(TOKEN_MINT, interval))


class TestAggregatorSignal:

    def setup_method(self):
        self.oracle = StaticPriceOracle({TOKEN_MINT: 0.0042})

    def test_uses_oracle_price_and_pair_change(self):
        signal = AggregatorSignal(json_client([raw_pair()]), self.oracle)

        snap = snapshot(signal, "1h")

        assert snap.price == 0.0042
        assert snap.percent_change == -4.0
        assert snap.start_spread == 0.0
        assert snap.blend_from == 0.5

    def test_interval_without_change_data(self):
        signal = AggregatorSignal(json_client([raw_pair()]), self.oracle)

        assert snapshot(signal, "1s").percent_change is None

    def test_unknown_interval_reads_5m_change(self):
        signal = AggregatorSignal(json_client([raw_pair()]), self.oracle)

        assert snapshot(signal, "weekly").percent_change == 2.5

    def test_no_sol_pair(self):
        signal = AggregatorSignal(json_client([raw_pair(quote_symbol="USDC")]), self.oracle)

        with pytest.raises(PairNotFound):
            snapshot(signal)

    def test_no_price(self):
        signal = AggregatorSignal(json_client([raw_pair()]), StaticPriceOracle({}))

        with pytest.raises(PriceUnavailable):
            snapshot(signal)

    def test_upstream_down(self):
        signal = AggregatorSignal(json_client({}, status_code=503), self.oracle)

        with pytest.raises(UpstreamFailure):
            snapshot(signal)


class TestSyntheticSeedSignal:

    def test_seed_in_range(self):
        signal = SyntheticSeedSignal(random.Random(8), seed_min=0.5, seed_max=0.6)

        for _ in range(50):
            snap = snapshot(signal)
            assert 0.5 <= snap.price < 0.6
            assert snap.percent_change is None
            assert snap.start_spread == 0.2
            assert snap.blend_from == 0.0

    def test_reproducible(self):
        first = snapshot(SyntheticSeedSignal(random.Random(3)))
        second = snapshot(SyntheticSeedSignal(random.Random(3)))

        assert first == second

    @pytest.mark.parametrize("seed_min, seed_max", [(0.0, 1.0), (1.0, 0.5), (-1.0, 1.0)])
    def test_invalid_range(self, seed_min, seed_max):
        with pytest.raises(ValueError):
            SyntheticSeedSignal(random.Random(), seed_min=seed_min, seed_max=seed_max)
