import blendtext

def test_api_repr_str():
    header = blendtext.FileHeader(8, True, "300")
    report = blendtext.BlendTextReport(header, total_blocks=3)
    assert repr(report) == "BlendTextReport(version='300', blocks=3, texts=[])"
    assert str(report) == repr(report)

    resource = blendtext.TextResource("x" * 120, "pass", 0)
    long_report = blendtext.BlendTextReport(header, 1, [blendtext.AnalyzedText(resource, blendtext.RiskAssessment())])
    assert repr(long_report).endswith("...)")

def test_block_repr_hides_body():
    block = blendtext.Block("DATA", 4, 0, 1, b"\0\0\0\0", 12)
    assert repr(block) == "Block(code='DATA', length=4, sdna_index=0, count=1, file_offset=12)"

def test_options_repr():
    assert repr(blendtext.ExtractOptions()) == "ExtractOptions(lookahead=100, decompress=True)"
