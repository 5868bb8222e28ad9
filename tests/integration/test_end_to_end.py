"""End-to-end integration tests."""

from __future__ import annotations

import gzip
import io
from pathlib import Path

import pytest

from nbtcodec import (
    CodecConfig,
    Compound,
    Int,
    List,
    Long,
    String,
    decode,
    encode,
    field_sizes,
    from_native,
    load,
    read,
    root_size,
    save,
    to_native,
    write,
)
from nbtcodec.exceptions import HeterogeneousListError, NbtError


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_level_file_workflow(self, tmp_path: Path, level: Compound) -> None:
        """Test a level file saved, inspected and reloaded."""
        # 1. Save gzip-framed, the usual format for standalone files
        path = tmp_path / "level.dat"
        save(level, path, compression="gzip")

        # 2. The file is plain gzip around the raw encoding
        raw = gzip.decompress(path.read_bytes())
        assert raw == encode(level)
        assert len(raw) == root_size(level)

        # 3. Reload, detecting the compression
        loaded = load(path, compression="auto")
        assert loaded == level

        # 4. Field values survived with their tags
        assert loaded["intTest"] == Int(2147483647)
        assert loaded["listTest (long)"][4] == Long(15)
        assert loaded["nested compound test"]["egg"]["name"] == String("Eggbert")
        assert loaded["listOfLists"][1] == List()

    def test_edit_and_resave(self, tmp_path: Path, player: Compound) -> None:
        """Test modifying a loaded tree and writing it back."""
        path = tmp_path / "player.dat"
        save(player, path, compression="zlib")

        loaded = load(path, compression="zlib")
        fields = dict(loaded.value)
        fields["hp"] = Int(loaded["hp"].value - 5)  # type: ignore[attr-defined]
        fields["tags"] = List([*loaded["tags"].value, String("tired")])  # type: ignore[attr-defined]
        save(Compound(fields), path, compression="zlib")

        reloaded = load(path, compression="auto")
        assert reloaded["hp"] == Int(15)
        assert len(reloaded["tags"]) == 3  # type: ignore[arg-type]
        assert reloaded["name"] == String("Bob")

    def test_failed_save_keeps_existing_file(self, tmp_path: Path, player: Compound) -> None:
        """Test an unencodable tree does not clobber the file on disk."""
        path = tmp_path / "player.dat"
        save(player, path)
        before = path.read_bytes()

        broken = Compound({"tags": List([String("fast"), Int(1)])})
        with pytest.raises(HeterogeneousListError):
            save(broken, path)

        assert path.read_bytes() == before

    def test_native_workflow(self) -> None:
        """Test building a tree from plain Python values."""
        native = {
            "name": "Bob",
            "hp": Int(20),
            "inventory": [{"id": "sword", "count": Int(1)}, {"id": "apple", "count": Int(3)}],
        }

        root = from_native(native)
        assert isinstance(root, Compound)

        data = encode(root, compression="gzip")
        assert to_native(decode(data, compression="auto")) == {
            "name": "Bob",
            "hp": 20,
            "inventory": [{"id": "sword", "count": 1}, {"id": "apple", "count": 3}],
        }

    def test_multiple_roots_in_one_stream(self, player: Compound, level: Compound) -> None:
        """Test consecutive raw roots read back one after another."""
        stream = io.BytesIO()
        write(player, stream)
        write(level, stream)
        stream.seek(0)

        assert read(stream) == player
        assert read(stream) == level

    def test_depth_limited_untrusted_input(self) -> None:
        """Test max_depth guards against deeply nested input."""
        deep: Compound = Compound()
        for _ in range(50):
            deep = Compound({"d": deep})
        data = encode(deep, compression="gzip")

        config = CodecConfig(compression="auto", max_depth=16)
        with pytest.raises(NbtError, match="max_depth"):
            decode(data, config=config)

        assert decode(data, compression="auto") == deep

    def test_size_breakdown(self, level: Compound) -> None:
        """Test per-field sizes add up to the whole stream."""
        sizes = field_sizes(level)
        names = sum(3 + len(name.encode("utf-8")) for name in level.value)

        assert 3 + sum(sizes.values()) + names + 1 == root_size(level)
