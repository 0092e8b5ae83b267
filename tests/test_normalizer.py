from chabash.context.normalizer import normalize_text, split_sentences


def test_normalize_folds_newlines_and_drops_unprintable():
    assert normalize_text("a\r\nb\tcé") == "a  bc"
    assert normalize_text("") == ""


def test_split_sentences_keeps_marks():
    text = "Hello there. How are you? Fine! ok"
    assert split_sentences(text) == ["Hello there.", "How are you?", "Fine!", "ok"]


def test_split_across_lines():
    text = "one line\ncontinues here. next\n"
    assert split_sentences(text) == ["one line continues here.", "next"]


def test_no_break_without_space():
    assert split_sentences("v1.2 is out") == ["v1.2 is out"]
