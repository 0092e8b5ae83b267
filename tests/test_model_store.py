# test_model_store.py - graph save / load
import pytest

from chabash.context.tokenizer import BEGIN, END
from chabash.core.graph import MarkovGraph
from chabash.errors import ModelStoreError
from chabash.utils.model_store import (
    dump_graph,
    load_graph,
    load_or_seed,
    parse_graph,
    save_graph,
    seed_graph,
)


def _snapshot(graph):
    return {
        n.word: (
            [(e.word, e.weight) for e in n.nexts], n.out_total,
            [(e.word, e.weight) for e in n.prevs], n.in_total,
        )
        for n in graph
    }


def test_round_trip_is_isomorphic(tmp_path):
    g = seed_graph()
    g.add_sentences(["i don't know, really?", "man, oh man!"])
    path = tmp_path / "graph.dat"
    save_graph(g, path)
    assert _snapshot(load_graph(path)) == _snapshot(g)


def test_round_trip_forward_only(tmp_path):
    g = seed_graph(bidirectional=False)
    path = tmp_path / "graph.dat"
    save_graph(g, path)
    text = path.read_text()
    assert "_prevs=" not in text
    loaded = load_graph(path, bidirectional=False)
    assert _snapshot(loaded) == _snapshot(g)


def test_line_format():
    g = MarkovGraph()
    g.add_sentence("hi there")
    g.add_sentence("hi you")
    lines = dump_graph(g).splitlines()
    assert 'CB_hi_nexts=([0]="there" [1]="you")' in lines
    assert 'CB_hi_counts=([0]="1" [1]="1")' in lines
    assert "CB_hi_total=2" in lines
    assert 'CB___BEGIN___nexts=([0]="hi")' in lines
    assert 'CB___END___prevs=([0]="there" [1]="you")' in lines
    assert "CB___END___prev_total=2" in lines
    assert lines == sorted(lines)


def test_custom_prefix():
    g = MarkovGraph()
    g.add_sentence("yo")
    text = dump_graph(g, prefix="ZZ")
    assert all(line.startswith("ZZ_") for line in text.splitlines())
    assert _snapshot(parse_graph(text, prefix="ZZ")) == _snapshot(g)
    assert len(parse_graph(text, prefix="CB")) == 0


def test_save_overwrites(tmp_path):
    path = tmp_path / "graph.dat"
    big = seed_graph()
    save_graph(big, path)
    small = MarkovGraph()
    small.add_sentence("just this")
    save_graph(small, path)
    assert path.read_text() == dump_graph(small)
    assert list(tmp_path.iterdir()) == [path]


def test_foreign_lines_are_ignored():
    text = (
        "BASH=/bin/bash\n"
        'CB_hi_nexts=([0]="__END__")\n'
        'CB_hi_counts=([0]="4")\n'
        "CB_hi_total=4\n"
        'CB___BEGIN___nexts=([0]="hi")\n'
        'CB___BEGIN___counts=([0]="4")\n'
        "CB___BEGIN___total=4\n"
    )
    g = parse_graph(text)
    assert g.out_total("hi") == 4
    # no incoming index stored, rebuilt from the outgoing edges
    assert [(e.word, e.weight) for e in g.edges_in("hi").edges] == [(BEGIN, 4)]
    assert g.edges_in(END).total == 4


def test_inconsistent_prevs_are_rebuilt():
    # prevs array left empty while its counts grew
    text = (
        'CB_a_nexts=([0]="b")\n'
        'CB_a_counts=([0]="2")\n'
        "CB_a_total=2\n"
        "CB_b_prevs=()\n"
        'CB_b_prev_counts=([0]="2")\n'
        "CB_b_prev_total=2\n"
    )
    g = parse_graph(text)
    assert [(e.word, e.weight) for e in g.edges_in("b").edges] == [("a", 2)]


def test_stored_total_is_recomputed():
    text = 'CB_a_nexts=([0]="b" [1]="c")\nCB_a_counts=([0]="2" [1]="3")\nCB_a_total=99\n'
    assert parse_graph(text).out_total("a") == 5


@pytest.mark.parametrize("bad", [
    "CB_hi_bogus=1",
    "CB_hi nexts=()",
    'CB_hi_nexts=([0]="x")\nCB_hi_counts=([0]="many")',
    'CB_hi_nexts=([0]="x")\nCB_hi_counts=([0]="0")',
    'CB_hi_nexts=x\nCB_hi_counts=([0]="1")',
])
def test_corrupt_store_raises(bad):
    with pytest.raises(ModelStoreError):
        parse_graph(bad)


def test_error_points_at_line(tmp_path):
    path = tmp_path / "graph.dat"
    path.write_text("CB_ok_total=1\nCB_what_is_this=2\n")
    with pytest.raises(ModelStoreError) as info:
        load_graph(path)
    assert info.value.lineno == 2


def test_load_or_seed_without_file(tmp_path):
    path = tmp_path / "missing.dat"
    g = load_or_seed(path)
    assert "nantucket" in g
    assert g.out_total("sandwich") == 3
    assert not path.exists()


def test_load_or_seed_prefers_file(tmp_path):
    path = tmp_path / "graph.dat"
    g = MarkovGraph()
    g.add_sentence("only me")
    save_graph(g, path)
    loaded = load_or_seed(path)
    assert "nantucket" not in loaded
    assert "only" in loaded


def test_undecodable_store_raises(tmp_path):
    path = tmp_path / "graph.dat"
    path.write_bytes(b'CB_hi_nexts=([0]="__END__")\nCB_hi_total=\xff\xfe\n')
    with pytest.raises(ModelStoreError) as info:
        load_graph(path)
    assert info.value.lineno == 2
    assert info.value.line.startswith("CB_hi_total=")
