from chabash.context.tokenizer import COMMA
from chabash.core.graph import MarkovGraph
from chabash.core.rarity import rarest_known_word


def _graph_with_totals(**totals):
    g = MarkovGraph()
    for word, n in totals.items():
        for i in range(n):
            g.add_edge(word, f"t{i}")
    return g


def test_picks_smallest_out_total():
    g = _graph_with_totals(a=6, man=5, plan=1)
    assert rarest_known_word(g, "a man a plan") == "plan"


def test_unknown_words_are_skipped_not_zero():
    g = _graph_with_totals(a=3)
    assert rarest_known_word(g, "zebra a") == "a"


def test_nothing_known():
    g = _graph_with_totals(a=3)
    assert rarest_known_word(g, "zebra quagga") is None
    assert rarest_known_word(g, "") is None


def test_ties_go_to_first_occurrence():
    g = _graph_with_totals(x=2, y=2)
    assert rarest_known_word(g, "y x") == "y"


def test_punctuation_is_ignored():
    g = _graph_with_totals(a=5)
    g.add_edge(COMMA, "a")
    assert rarest_known_word(g, "a, a") == "a"


def test_apostrophe_words_are_looked_up_encoded():
    g = MarkovGraph()
    g.add_sentences(["i don't know", "i know", "i know"])
    assert rarest_known_word(g, "i don't") == "don_t"
