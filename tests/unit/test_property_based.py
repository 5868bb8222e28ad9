"""Property-based tests using hypothesis."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from nbtcodec import (
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
    Tag,
    decode,
    encode,
    root_size,
)
from nbtcodec.exceptions import HeterogeneousListError, TruncatedError

int32s = st.integers(min_value=-(2**31), max_value=2**31 - 1)
int64s = st.integers(min_value=-(2**63), max_value=2**63 - 1)
names = st.text(max_size=8)

LEAF_STRATEGIES = [
    st.integers(min_value=-(2**7), max_value=2**7 - 1).map(Byte),
    st.integers(min_value=-(2**15), max_value=2**15 - 1).map(Short),
    int32s.map(Int),
    int64s.map(Long),
    st.floats(width=32, allow_nan=False).map(Float),
    st.floats(allow_nan=False).map(Double),
    st.binary(max_size=32).map(ByteArray),
    st.text(max_size=16).map(String),
    st.lists(int32s, max_size=8).map(IntArray),
    st.lists(int64s, max_size=8).map(LongArray),
]

leaves = st.one_of(*LEAF_STRATEGIES)

# Every element of a list shares one tag
homogeneous_lists = st.one_of(*(st.lists(s, max_size=5).map(List) for s in LEAF_STRATEGIES))


def _extend(children: st.SearchStrategy[Tag]) -> st.SearchStrategy[Tag]:
    compounds = st.dictionaries(names, children, max_size=4).map(Compound)
    return st.one_of(
        compounds,
        st.lists(compounds, max_size=3).map(List),
        st.lists(homogeneous_lists, max_size=3).map(List),
    )


tags = st.recursive(st.one_of(leaves, homogeneous_lists), _extend, max_leaves=20)
roots = st.dictionaries(names, tags, max_size=6).map(Compound)

tree_settings = settings(
    max_examples=75,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)


class TestCodecProperties:
    """Property-based tests for the tree codec."""

    @tree_settings
    @given(root=roots)
    def test_encode_decode_roundtrip(self, root: Compound) -> None:
        """Test encode/decode is invertible."""
        assert decode(encode(root)) == root

    @tree_settings
    @given(root=roots)
    def test_encode_deterministic(self, root: Compound) -> None:
        """Test encoding is deterministic."""
        assert encode(root) == encode(root.model_copy(deep=True))

    @tree_settings
    @given(root=roots)
    def test_root_size_matches_encoding(self, root: Compound) -> None:
        """Test the size calculation agrees with the encoder."""
        assert root_size(root) == len(encode(root))

    @tree_settings
    @given(root=roots)
    def test_every_prefix_is_truncated(self, root: Compound) -> None:
        """Test cutting a stream anywhere before its end is detected."""
        data = encode(root)

        for cut in range(len(data)):
            with pytest.raises(TruncatedError):
                decode(data[:cut])

    @tree_settings
    @given(root=roots, trailing=st.binary(min_size=1, max_size=16))
    def test_trailing_bytes_ignored(self, root: Compound, trailing: bytes) -> None:
        """Test decoding consumes exactly one root."""
        assert decode(encode(root) + trailing) == root

    @tree_settings
    @given(root=roots)
    def test_field_order_irrelevant(self, root: Compound) -> None:
        """Test a compound with reordered fields decodes equal."""
        reordered = Compound(dict(reversed(list(root.value.items()))))

        assert decode(encode(reordered)) == root

    @settings(max_examples=25, deadline=None)
    @given(root=roots)
    def test_compressed_roundtrip(self, root: Compound) -> None:
        """Test both transforms are invertible."""
        assert decode(encode(root, compression="gzip"), compression="auto") == root
        assert decode(encode(root, compression="zlib"), compression="auto") == root


class TestListProperties:
    """Property-based tests for list homogeneity."""

    @given(first=leaves, second=leaves)
    def test_mixed_list_rejected(self, first: Tag, second: Tag) -> None:
        """Test any two differently-tagged elements make a list unencodable."""
        assume(first.tag_id != second.tag_id)
        root = Compound({"mixed": List([first, second])})

        with pytest.raises(HeterogeneousListError) as exc_info:
            encode(root)

        assert exc_info.value.path[-1] == 1

    @given(items=st.lists(int32s, min_size=1, max_size=20))
    def test_list_header(self, items: list[int]) -> None:
        """Test the list header carries the element tag and exact count."""
        data = encode(Compound({"l": List([Int(v) for v in items])}))
        header = data[3 + 1 + 2 + 1 :]

        assert header[0] == 3
        assert int.from_bytes(header[1:5], "big", signed=True) == len(items)
        assert len(data) == 3 + 1 + 2 + 1 + 1 + 4 + 4 * len(items) + 1
