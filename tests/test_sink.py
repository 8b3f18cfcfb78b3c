import json

from tubescraper.sink import JsonLinesSink, ListSink
from tubescraper.utils.normalize import extract_detail


def _record(video_id):
    return extract_detail({"href": f"https://www.youtube.com/watch?v={video_id}", "viewText": "5 views"})


def test_list_sink_keeps_order_and_duplicates():
    sink = ListSink()
    for vid in ("a", "b", "a"):
        sink.push(_record(vid))
    assert [r.id for r in sink.records] == ["a", "b", "a"]


def test_json_lines_sink_writes_one_object_per_line(tmp_path):
    path = tmp_path / "out" / "dataset.jsonl"
    with JsonLinesSink(path) as sink:
        sink.push(_record("a"))
        sink.push(_record("b"))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["id"] for line in lines] == ["a", "b"]
    assert json.loads(lines[0])["views"] == 5
    assert sink.count == 2


def test_json_lines_sink_flushes_before_close(tmp_path):
    path = tmp_path / "dataset.jsonl"
    sink = JsonLinesSink(path).open()
    sink.push(_record("a"))
    # readable while the sink is still open
    assert json.loads(path.read_text(encoding="utf-8"))["id"] == "a"
    sink.close()


def test_json_lines_sink_appends_across_runs(tmp_path):
    path = tmp_path / "dataset.jsonl"
    with JsonLinesSink(path) as sink:
        sink.push(_record("a"))
    with JsonLinesSink(path) as sink:
        sink.push(_record("b"))
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2
