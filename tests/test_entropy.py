"""
Tests for random byte sources.
"""

import pytest

from cpgen.config import QuantumSourceConfig
from cpgen.entropy import (
    QuantumRandomSource,
    RandomSourceError,
    ScriptedRandomSource,
    SystemRandomSource,
    source_factory,
)


def test_system_source_reads_exact_length():
    with SystemRandomSource() as source:
        assert len(source.read(64)) == 64
        assert source.read(0) == b""
    assert source.closed


def test_closed_source_refuses_reads():
    source = SystemRandomSource()
    source.close()
    with pytest.raises(RandomSourceError):
        source.read(1)


def test_negative_read_rejected():
    with SystemRandomSource() as source:
        with pytest.raises(ValueError):
            source.read(-1)


class TestScriptedRandomSource:
    def test_replays_bytes_in_order(self):
        source = ScriptedRandomSource([1, 2, 3, 4])
        assert source.read(3) == b"\x01\x02\x03"
        assert source.read(1) == b"\x04"
        assert source.bytes_read == 4

    def test_raises_when_exhausted(self):
        source = ScriptedRandomSource(b"\x01\x02")
        with pytest.raises(RandomSourceError):
            source.read(3)

    def test_cycles(self):
        source = ScriptedRandomSource(b"ab", cycle=True)
        assert source.read(5) == b"ababa"
        assert source.read(2) == b"ba"
        assert source.bytes_read == 7

    def test_empty_cycle_rejected(self):
        with pytest.raises(ValueError):
            ScriptedRandomSource(b"", cycle=True)


def test_source_factory_lookup():
    assert source_factory("system") is SystemRandomSource
    assert source_factory("quantum") is QuantumRandomSource
    with pytest.raises(ValueError):
        source_factory("dice")


class ConstantEngine:
    """Engine stand-in that always returns the same bits."""

    def __init__(self, bit=1):
        self.bit = bit
        self.calls = 0

    def sample_bits(self, count):
        self.calls += 1
        return [self.bit] * count


class ShortEngine:
    def sample_bits(self, count):
        return [0] * (count - 1)


class TestQuantumRandomSource:
    def test_constant_engine_still_varies(self):
        engine = ConstantEngine()
        blocks = set()
        with QuantumRandomSource(QuantumSourceConfig(quantum_streams=1), engine=engine) as source:
            for _ in range(10):
                blocks.add(source.read(32))

        assert len(blocks) == 10
        assert engine.calls == 10

    def test_streams_sampled_per_block(self):
        engine = ConstantEngine(bit=0)
        cfg = QuantumSourceConfig(quantum_streams=3, entropy_rounds=0)

        with QuantumRandomSource(cfg, engine=engine) as source:
            assert len(source.read(40)) == 40

        # 40 bytes need two 32-byte blocks of three streams each
        assert engine.calls == 6
        assert source.closed

    def test_short_engine_output_rejected(self):
        source = QuantumRandomSource(engine=ShortEngine())
        with pytest.raises(RandomSourceError):
            source.read(1)

    def test_small_blocks_rejected(self):
        with pytest.raises(ValueError):
            QuantumRandomSource(QuantumSourceConfig(block_bits=128), engine=ConstantEngine())
