"""Tests for infrastructure/adapters/block_handle.py."""

import pytest

from blockfilter.domain.model.block import Block
from blockfilter.infrastructure.adapters.block_handle import LazyBlockHandle, NativeBlockHandle
from tests.factories import make_block


class CountingDecoder:
    """Decoder recording how many times it ran."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, payload: object) -> Block:
        self.calls += 1
        return make_block(block_id=str(payload))


class TestLazyBlockHandle:
    """Tests for LazyBlockHandle."""

    def test_not_decoded_until_accessed(self) -> None:
        decoder = CountingDecoder()
        handle = LazyBlockHandle("abc", decoder)

        assert handle.decoded is False
        assert decoder.calls == 0

    def test_decodes_once_and_memoizes(self) -> None:
        decoder = CountingDecoder()
        handle = LazyBlockHandle("abc", decoder)

        first = handle.to_native()
        second = handle.to_native()

        assert first is second
        assert first.id == "abc"
        assert decoder.calls == 1
        assert handle.decoded is True

    def test_mutations_visible_on_later_access(self) -> None:
        handle = LazyBlockHandle("abc", CountingDecoder())
        handle.to_native().filtering_applied = True

        assert handle.to_native().filtering_applied is True

    def test_decoder_error_propagates_and_retries(self) -> None:
        def broken(payload: object) -> Block:
            raise ValueError("corrupt payload")

        handle = LazyBlockHandle(b"\x00", broken)

        with pytest.raises(ValueError, match="corrupt payload"):
            handle.to_native()
        assert handle.decoded is False

    def test_non_callable_decoder_raises(self) -> None:
        with pytest.raises(TypeError, match="decoder must be callable"):
            LazyBlockHandle("abc", "not a function")  # type: ignore[arg-type]


class TestNativeBlockHandle:
    """Tests for NativeBlockHandle."""

    def test_returns_wrapped_block(self) -> None:
        block = make_block()
        assert NativeBlockHandle(block).to_native() is block

    def test_none_raises(self) -> None:
        with pytest.raises(TypeError, match="block must not be None"):
            NativeBlockHandle(None)  # type: ignore[arg-type]
